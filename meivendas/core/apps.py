# meivendas/core/apps.py

from django.apps import AppConfig

class CoreConfig(AppConfig):
    # O nome completo do path da aplicação
    name = 'meivendas.core'
    label = 'core'
    verbose_name = 'Regras de Negócio do MEI (Core)'

    # Sem modelos: a persistência fica na camada de infraestrutura.
    default_auto_field = 'django.db.models.BigAutoField'
