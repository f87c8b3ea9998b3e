from django.apps import AppConfig


class InfrastructureConfig(AppConfig):
    name = 'vitrine.infrastructure'
    label = 'infrastructure'
    verbose_name = 'Gateway da API e Armazenamento Local'
