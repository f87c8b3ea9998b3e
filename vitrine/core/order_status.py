# vitrine/core/order_status.py
"""
Derivação do status de exibição de um pedido.

Os pedidos chegam da API com formatos variados (o schema evoluiu com o tempo),
então o status mostrado é inferido a partir de vários sinais com uma ordem de
precedência fixa. Toda listagem de pedidos (cliente e admin) DEVE passar por
este módulo para que o mesmo pedido apareça com o mesmo status em qualquer tela.
"""
from typing import Any, Dict, Mapping, Optional

PROCESSING = 'processing'
SHIPPED = 'shipped'
DELIVERED = 'delivered'
CANCELLED = 'cancelled'

# Status aceitos na atualização manual feita pelo administrador.
STATUS_CHOICES = (PROCESSING, SHIPPED, DELIVERED, CANCELLED)

_BADGES = {
    PROCESSING: 'warning',
    SHIPPED: 'info',
    DELIVERED: 'success',
    CANCELLED: 'danger',
}
BADGE_NEUTRAL = 'neutral'


def _payment_status(order: Mapping[str, Any]) -> Optional[Any]:
    payment_result = order.get('paymentResult')
    if isinstance(payment_result, Mapping):
        return payment_result.get('status') or None
    return None


def derive_status(order: Optional[Mapping[str, Any]]) -> str:
    """
    Retorna o status de exibição do pedido. A primeira regra que casar vence:

    1. `status` explícito e não vazio (devolvido como veio);
    2. `isCancelled` -> cancelled;
    3. `isDelivered` -> delivered;
    4. `isPaid` -> shipped se houver `trackingNumber` (ou paymentResult.status
       == 'shipped'), senão processing;
    5. `paymentResult.status` -> processing se 'pending', senão o próprio valor;
    6. processing.
    """
    if not isinstance(order, Mapping):
        return PROCESSING

    status = order.get('status')
    if status:
        return str(status)

    if order.get('isCancelled'):
        return CANCELLED

    if order.get('isDelivered'):
        return DELIVERED

    payment_status = _payment_status(order)

    if order.get('isPaid'):
        if order.get('trackingNumber') or payment_status == SHIPPED:
            return SHIPPED
        return PROCESSING

    if payment_status:
        if payment_status == 'pending':
            return PROCESSING
        return str(payment_status)

    return PROCESSING


def status_badge(status: Optional[str]) -> str:
    """Cor do badge para um status (sem diferenciar maiúsculas/minúsculas)."""
    if not status:
        return BADGE_NEUTRAL
    return _BADGES.get(str(status).lower(), BADGE_NEUTRAL)


def format_status(status: Optional[str]) -> str:
    """Primeira letra em maiúscula, o restante como veio."""
    if not status:
        return ''
    status = str(status)
    return status[:1].upper() + status[1:]


def annotate_order(order: Mapping[str, Any]) -> Dict[str, Any]:
    """Cópia do pedido com o status derivado, o rótulo e a cor do badge."""
    status = derive_status(order)
    annotated = dict(order)
    annotated['derivedStatus'] = status
    annotated['statusLabel'] = format_status(status)
    annotated['statusBadge'] = status_badge(status)
    return annotated
