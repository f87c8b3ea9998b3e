"""
Context processors para a aplicação presentation.
"""
import logging

from vitrine.core.exceptions import BaseErroCore

from . import dependency_injection as di

logger = logging.getLogger(__name__)


def vitrine_context(request):
    """
    Adiciona o resumo do carrinho e da sessão ao contexto global dos templates.
    """
    if not hasattr(request, 'session'):
        return {}

    try:
        cart_store = di.get_cart_store(request)
        holder = di.get_auth_session(request)
    except BaseErroCore as e:
        # Em caso de erro, retorna um dicionário vazio para não quebrar o template
        logger.warning("Erro ao processar vitrine_context: %s", e)
        return {}

    return {
        'cart_quantity': cart_store.cart_quantity,
        'cart_total': cart_store.cart_total,
        'usuario': holder.user,
        'is_admin': holder.is_admin,
    }
