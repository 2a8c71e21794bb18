from django.apps import AppConfig
from django.db.models.signals import post_migrate


SUPER_ADMIN_GROUP = "super_admin"


def ensure_super_admin_group(sender, **kwargs):
    # Crea el grupo "super_admin" si no existe (idempotente)
    from django.contrib.auth.models import Group
    Group.objects.get_or_create(name=SUPER_ADMIN_GROUP)


class AccountsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "confcore.apps.accounts"

    def ready(self):
        # Conectamos el hook post_migrate una sola vez
        post_migrate.connect(ensure_super_admin_group, sender=self, dispatch_uid="accounts.ensure_super_admin_group")
