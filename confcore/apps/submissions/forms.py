# confcore/apps/submissions/forms.py
from __future__ import annotations

from typing import Any, List

from django import forms
from django.conf import settings
from django.core.validators import MaxLengthValidator

from .models import STATUS_CHOICES, TYPE_CHOICES


# ---------- Palabras clave ----------
class KeywordsField(forms.Field):
    """
    Lista de palabras clave. Acepta una lista JSON o un texto separado por comas.
    Los límites (cantidad y largo) salen de settings para poder ajustarlos por evento.
    """
    default_error_messages = {
        "invalid": "Las palabras clave deben ser una lista de textos.",
        "too_many": "Máximo %(max)d palabras clave.",
        "too_long": "Cada palabra clave admite hasta %(max)d caracteres.",
    }

    def to_python(self, value: Any) -> List[str]:
        if value in self.empty_values:
            return []
        if isinstance(value, str):
            value = value.split(",")
        if not isinstance(value, (list, tuple)):
            raise forms.ValidationError(self.error_messages["invalid"], code="invalid")
        keywords: List[str] = []
        for item in value:
            if not isinstance(item, str):
                raise forms.ValidationError(self.error_messages["invalid"], code="invalid")
            item = item.strip()
            if item:
                keywords.append(item)
        return keywords

    def validate(self, value: List[str]) -> None:
        super().validate(value)
        max_items = settings.SUBMISSION_MAX_KEYWORDS
        max_length = settings.SUBMISSION_KEYWORD_MAX_LENGTH
        if len(value) > max_items:
            raise forms.ValidationError(
                self.error_messages["too_many"], code="too_many", params={"max": max_items}
            )
        if any(len(k) > max_length for k in value):
            raise forms.ValidationError(
                self.error_messages["too_long"], code="too_long", params={"max": max_length}
            )


# ---------- Alta / edición de contenido ----------
class SubmissionForm(forms.Form):
    title = forms.CharField(label="Título")
    abstract = forms.CharField(label="Resumen")
    keywords = KeywordsField(label="Palabras clave")
    type = forms.ChoiceField(label="Tipo", choices=TYPE_CHOICES)

    def __init__(self, *args, partial: bool = False, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["title"].validators.append(MaxLengthValidator(settings.SUBMISSION_TITLE_MAX_LENGTH))
        self.fields["abstract"].validators.append(MaxLengthValidator(settings.SUBMISSION_ABSTRACT_MAX_LENGTH))

        # Edición parcial: solo se validan los campos que vinieron
        if partial:
            for name in list(self.fields):
                if name not in self.data:
                    del self.fields[name]


class CoAuthorForm(forms.Form):
    name = forms.CharField(max_length=255)
    email = forms.EmailField()
    institution = forms.CharField(max_length=255, required=False)


# ---------- Estado (organizador) ----------
class StatusForm(forms.Form):
    status = forms.ChoiceField(choices=STATUS_CHOICES)
    admin_comments = forms.CharField(required=False)


class SubmissionFilterForm(forms.Form):
    status = forms.ChoiceField(choices=(("", "Todos"),) + STATUS_CHOICES, required=False)
    type = forms.ChoiceField(choices=(("", "Todos"),) + TYPE_CHOICES, required=False)


# ---------- Archivo PDF ----------
class SubmissionFileForm(forms.Form):
    file = forms.FileField()

    def clean_file(self):
        f = self.cleaned_data["file"]
        if not (f.name or "").lower().endswith(".pdf"):
            raise forms.ValidationError("Solo se aceptan archivos PDF.")
        max_bytes = settings.SUBMISSION_FILE_MAX_BYTES
        if f.size > max_bytes:
            raise forms.ValidationError(f"El archivo supera el máximo de {max_bytes // (1024 * 1024)} MB.")
        return f
