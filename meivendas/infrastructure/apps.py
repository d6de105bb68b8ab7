from django.apps import AppConfig


class InfrastructureConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'meivendas.infrastructure'
    label = 'infrastructure' # Label curto usado em AUTH_USER_MODEL e nas migrações
    verbose_name = 'Vendas MEI'
