# Por defecto se usan los settings de desarrollo.
# En producción: DJANGO_SETTINGS_MODULE=confcore.confcore.settings.prod
from .base import *  # noqa: F401,F403
