# vitrine/presentation/dependency_injection.py
"""
Módulo de Injeção de Dependência (DI).

Cria, uma vez por requisição, o armazenamento local do visitante e os dois
stores do Core (carrinho e sessão) e os injeta nos Use Cases. Nada aqui é
estado global mutável: apenas o gateway HTTP é reaproveitado, um por thread.
"""
import threading

from django.conf import settings

from vitrine.core.auth_session import AuthSessionHolder
from vitrine.core.cart_store import CartStore
from vitrine.core.use_cases import (
    FinalizarPedidoUseCase,
    GerenciarPedidosAdminUseCase,
    GerenciarProdutosAdminUseCase,
    GerenciarUsuariosAdminUseCase,
    ListarPedidosDoUsuarioUseCase,
    ListarProdutosUseCase,
)
from vitrine.infrastructure.gateways import StorefrontApiGateway
from vitrine.infrastructure.storage import SessionStorage

_local = threading.local()


def get_api_gateway() -> StorefrontApiGateway:
    """
    Gateway por thread: reaproveita as conexões HTTP entre as requisições
    atendidas pela mesma thread, sem compartilhar o requests.Session entre threads.
    """
    gateway = getattr(_local, 'api_gateway', None)
    if gateway is None:
        gateway = StorefrontApiGateway(
            base_url=settings.VITRINE_API_URL,
            timeout=settings.VITRINE_API_TIMEOUT,
        )
        _local.api_gateway = gateway
    return gateway


def _django_request(request):
    # As views do DRF recebem um Request que embrulha o HttpRequest original.
    return getattr(request, '_request', request)


def get_storage(request) -> SessionStorage:
    return SessionStorage(_django_request(request).session)


def get_cart_store(request) -> CartStore:
    """CartStore da requisição (criado na primeira chamada e reutilizado)."""
    django_request = _django_request(request)
    store = getattr(django_request, '_vitrine_cart', None)
    if store is None:
        store = CartStore(get_storage(request))
        django_request._vitrine_cart = store
    return store


def get_auth_session(request) -> AuthSessionHolder:
    """AuthSessionHolder da requisição; valida o token salvo na criação."""
    django_request = _django_request(request)
    holder = getattr(django_request, '_vitrine_auth', None)
    if holder is None:
        holder = AuthSessionHolder(get_api_gateway(), get_storage(request))
        django_request._vitrine_auth = holder
    return holder


# ====================================================================
# Use Cases
# ====================================================================

def get_listar_produtos_use_case() -> ListarProdutosUseCase:
    return ListarProdutosUseCase(
        get_api_gateway(),
        api_base_url=settings.VITRINE_API_URL,
        placeholder=settings.VITRINE_PLACEHOLDER_IMAGE,
    )

def get_finalizar_pedido_use_case(request) -> FinalizarPedidoUseCase:
    return FinalizarPedidoUseCase(
        get_api_gateway(),
        carrinho=get_cart_store(request),
        sessao=get_auth_session(request),
        taxa_imposto=settings.VITRINE_TAX_RATE,
    )

def get_listar_pedidos_use_case(request) -> ListarPedidosDoUsuarioUseCase:
    return ListarPedidosDoUsuarioUseCase(get_api_gateway(), get_auth_session(request))

def get_gerenciar_pedidos_admin_use_case(request) -> GerenciarPedidosAdminUseCase:
    return GerenciarPedidosAdminUseCase(get_api_gateway(), get_auth_session(request))

def get_gerenciar_produtos_admin_use_case(request) -> GerenciarProdutosAdminUseCase:
    return GerenciarProdutosAdminUseCase(get_api_gateway(), get_auth_session(request))

def get_gerenciar_usuarios_admin_use_case(request) -> GerenciarUsuariosAdminUseCase:
    return GerenciarUsuariosAdminUseCase(get_api_gateway(), get_auth_session(request))
