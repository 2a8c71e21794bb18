# confcore/apps/reviews/forms.py
from __future__ import annotations

from django import forms
from django.conf import settings
from django.core.validators import MaxLengthValidator

from .models import (
    RECOMMENDATION_CHOICES,
    SCORE_MAX,
    SCORE_MIN,
    SUBSCORE_MAX,
    SUBSCORE_MIN,
)

SUBSCORE_FIELDS = ("relevance_score", "quality_score", "originality_score")


# ---------- Evaluación de una ponencia ----------
class EvaluationForm(forms.Form):
    """
    Puntuación global 0..10 (con decimales), sub-puntuaciones opcionales 1..5,
    comentarios y recomendación. Con partial=True solo se validan los campos
    que vinieron (PATCH).
    """
    score = forms.FloatField(label="Puntuación", min_value=SCORE_MIN, max_value=SCORE_MAX)
    relevance_score = forms.IntegerField(
        label="Relevancia", min_value=SUBSCORE_MIN, max_value=SUBSCORE_MAX, required=False
    )
    quality_score = forms.IntegerField(
        label="Calidad", min_value=SUBSCORE_MIN, max_value=SUBSCORE_MAX, required=False
    )
    originality_score = forms.IntegerField(
        label="Originalidad", min_value=SUBSCORE_MIN, max_value=SUBSCORE_MAX, required=False
    )
    comments = forms.CharField(label="Comentarios", required=False, strip=True)
    recommendation = forms.ChoiceField(label="Recomendación", choices=RECOMMENDATION_CHOICES)

    def __init__(self, *args, partial: bool = False, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["comments"].validators.append(
            MaxLengthValidator(settings.EVALUATION_COMMENTS_MAX_LENGTH)
        )
        if partial:
            for name in list(self.fields):
                if name not in self.data:
                    del self.fields[name]

    def clean_score(self):
        # JSON true/false no es un puntaje (float(True) == 1.0)
        if isinstance(self.data.get("score"), bool):
            raise forms.ValidationError("La puntuación debe ser un número.", code="invalid")
        return self.cleaned_data["score"]


# ---------- Asignación de evaluador ----------
class AssignmentForm(forms.Form):
    evaluator_id = forms.IntegerField(min_value=1)
