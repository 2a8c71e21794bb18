from pathlib import Path
import os

# === Paths ===
# base.py está en: <root>/confcore/confcore/settings/base.py
BASE_DIR = Path(__file__).resolve().parents[3]  # <root>

# === Seguridad / Debug ===
SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "dev-secret-key-change-me")
DEBUG = os.environ.get("DEBUG", "1") == "1"
ALLOWED_HOSTS = os.environ.get("ALLOWED_HOSTS", "127.0.0.1,localhost,testserver").split(",")

# === Apps ===
INSTALLED_APPS = [
    # Django core
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Apps del proyecto
    "confcore.apps.accounts",
    "confcore.apps.events",
    "confcore.apps.notifications",
    "confcore.apps.submissions",
    "confcore.apps.reviews",
]

# === Middleware ===
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

# === URLs raíz del proyecto ===
ROOT_URLCONF = "confcore.confcore.urls"

# === Templates (solo admin; la API responde JSON) ===
TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
                "context_processors": [
                    "django.template.context_processors.debug",
                    "django.template.context_processors.request",
                    "django.contrib.auth.context_processors.auth",
                    "django.contrib.messages.context_processors.messages",
                ],
        },
    },
]

# === WSGI ===
WSGI_APPLICATION = "confcore.confcore.wsgi.application"

# === Base de datos (SQLite por defecto) ===
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

# === Password validators ===
AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

# === i18n / tz ===
LANGUAGE_CODE = "es"
TIME_ZONE = "America/New_York"
USE_I18N = True
USE_TZ = True

# === Static / Media ===
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# Los PDFs de las ponencias se guardan en MEDIA_ROOT/submissions/
MEDIA_URL = "/media/"
MEDIA_ROOT = BASE_DIR / "media"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# === Email dev (opcional) ===
EMAIL_BACKEND = "django.core.mail.backends.console.EmailBackend"
DEFAULT_FROM_EMAIL = os.environ.get("DEFAULT_FROM_EMAIL", "noreply@example.com")

# === Reglas de ponencias y evaluaciones ===
SUBMISSION_MAX_KEYWORDS = int(os.environ.get("SUBMISSION_MAX_KEYWORDS", "10"))
SUBMISSION_KEYWORD_MAX_LENGTH = int(os.environ.get("SUBMISSION_KEYWORD_MAX_LENGTH", "50"))
SUBMISSION_TITLE_MAX_LENGTH = 255
SUBMISSION_ABSTRACT_MAX_LENGTH = int(os.environ.get("SUBMISSION_ABSTRACT_MAX_LENGTH", "5000"))
SUBMISSION_MAX_CO_AUTHORS = int(os.environ.get("SUBMISSION_MAX_CO_AUTHORS", "10"))
SUBMISSION_FILE_MAX_BYTES = int(os.environ.get("SUBMISSION_FILE_MAX_BYTES", str(5 * 1024 * 1024)))
EVALUATION_COMMENTS_MAX_LENGTH = int(os.environ.get("EVALUATION_COMMENTS_MAX_LENGTH", "2000"))

# Tamaño de página de los listados de la API
API_PAGE_SIZE = int(os.environ.get("API_PAGE_SIZE", "15"))

# === Logging ===
LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG" if DEBUG else "INFO")
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "%(levelname)s %(asctime)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "INFO",
    },
    "loggers": {
        "confcore": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "django.db.backends": {
            "level": "WARNING",
        },
    },
}
