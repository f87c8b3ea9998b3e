from django.apps import AppConfig


class PresentationConfig(AppConfig):
    name = 'vitrine.presentation'
    label = 'presentation' # Define um label para evitar conflitos de nomes
