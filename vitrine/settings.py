"""
Configurações para o projeto Vitrine.
"""

import os
from decimal import Decimal
from decouple import config, Csv
from pathlib import Path

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent


# ====================================================================
# CONFIGURAÇÕES BÁSICAS
# ====================================================================

# A SECRET_KEY deve ser lida de uma variável de ambiente por segurança.
# Ela também assina o cookie de sessão onde ficam o carrinho e o token.
SECRET_KEY = config('SECRET_KEY', default='django-insecure-default-key-for-development')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = config('DEBUG', default=False, cast=bool)

ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost,127.0.0.1,testserver', cast=Csv())


# ====================================================================
# APLICAÇÕES INSTALADAS
# ====================================================================

INSTALLED_APPS = [
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.staticfiles',

    # Aplicações de Terceiros (Primeiro)
    'rest_framework',
    'drf_spectacular',

    # Nossas Aplicações
    'vitrine.core.apps.CoreConfig', # Entidades e Lógica Pura
    'vitrine.infrastructure.apps.InfrastructureConfig', # Gateway da API e Armazenamento
    'vitrine.presentation.apps.PresentationConfig', # Views e Serializers
]


# ====================================================================
# MIDDLEWARE E TEMPLATES
# ====================================================================

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'vitrine.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',

                # Carrinho e sessão disponíveis na API navegável
                'vitrine.presentation.context_processors.vitrine_context',
            ],
        },
    },
]

WSGI_APPLICATION = 'vitrine.wsgi.application'


# ====================================================================
# BANCO DE DADOS E SESSÃO
# ====================================================================

# A vitrine não possui banco próprio: todos os dados vêm da API remota.
DATABASES = {}

# O carrinho e o token ficam na sessão do visitante. Por padrão a sessão é
# um cookie assinado (armazenamento do lado do cliente).
SESSION_ENGINE = config('SESSION_ENGINE', default='django.contrib.sessions.backends.signed_cookies')
SESSION_COOKIE_AGE = config('SESSION_COOKIE_AGE', default=60 * 60 * 24 * 30, cast=int)
SESSION_COOKIE_HTTPONLY = True


# ====================================================================
# INTERNACIONALIZAÇÃO
# ====================================================================

LANGUAGE_CODE = 'pt-br'

TIME_ZONE = 'America/Sao_Paulo'

USE_I18N = True

USE_TZ = True


# ====================================================================
# ARQUIVOS ESTÁTICOS
# ====================================================================

STATIC_URL = '/static/'
STATIC_ROOT = os.path.join(BASE_DIR, 'staticfiles')

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# ====================================================================
# CONFIGURAÇÕES DO DJANGO REST FRAMEWORK (DRF) E DOCS (SPECTACULAR)
# ====================================================================

SPECTACULAR_SETTINGS = {
    'TITLE': 'API da Vitrine',
    'DESCRIPTION': 'Endpoints da vitrine: catálogo, carrinho, checkout, pedidos e painel administrativo.',
    'VERSION': '1.0.0',
    'SERVE_INCLUDE_SCHEMA': False,
}

REST_FRAMEWORK = {
    # A autenticação é feita pela API remota; a sessão local guarda o token.
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': ['rest_framework.permissions.AllowAny'],
    'UNAUTHENTICATED_USER': None,
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
}


# ====================================================================
# API REMOTA DA LOJA
# ====================================================================

VITRINE_API_URL = config('VITRINE_API_URL', default='http://localhost:5000')
VITRINE_API_TIMEOUT = config('VITRINE_API_TIMEOUT', default=15.0, cast=float)
VITRINE_TAX_RATE = config('VITRINE_TAX_RATE', default='0.10', cast=Decimal)
VITRINE_PLACEHOLDER_IMAGE = config('VITRINE_PLACEHOLDER_IMAGE', default='/placeholder-image.jpg')


# Configurações de Logging
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'console': {
            'level': config('LOG_LEVEL', default='INFO'),
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
            'style': '{',
        },
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': True,
        },
        'vitrine': {
            'handlers': ['console'],
            'level': config('LOG_LEVEL', default='INFO'),
            'propagate': False,
        },
    },
}
