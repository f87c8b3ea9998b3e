from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional, Tuple

# ====================================================================
# ENTIDADES CORE
# Representam o estado do lado do cliente (carrinho e sessão).
# Pedidos e produtos vêm da API remota como dicionários e não viram entidades.
# ====================================================================

# Campos do produto copiados explicitamente para a linha do carrinho.
# Qualquer outro campo de exibição vai para `extras`.
_CAMPOS_PRODUTO = ('_id', 'id', 'name', 'price', 'image', 'quantity', 'size', 'color')


def normalizar_variacao(valor: Optional[str]) -> Optional[str]:
    """Tamanho/cor ausentes ou vazios são tratados como None."""
    if valor is None:
        return None
    valor = str(valor)
    return valor if valor != '' else None


def para_decimal(valor: Any) -> Decimal:
    """Converte preços vindos da API (float, int ou str) para Decimal."""
    if valor is None or valor == '':
        return Decimal('0')
    try:
        return Decimal(str(valor))
    except InvalidOperation:
        raise ValueError(f"Preço inválido: {valor!r}")


@dataclass
class CartLine:
    """Uma seleção distinta no carrinho, identificada por (produto, tamanho, cor)."""
    product_id: str
    quantity: int
    price: Decimal
    name: str = ''
    image: Optional[str] = None
    size: Optional[str] = None
    color: Optional[str] = None
    extras: Dict[str, Any] = field(default_factory=dict)

    @property
    def key(self) -> Tuple[str, Optional[str], Optional[str]]:
        return (self.product_id, self.size, self.color)

    @property
    def subtotal(self) -> Decimal:
        """Calcula o subtotal da linha."""
        return self.price * self.quantity

    @classmethod
    def from_product(
        cls,
        product: Mapping[str, Any],
        quantity: int,
        size: Optional[str] = None,
        color: Optional[str] = None,
    ) -> 'CartLine':
        """Cria a linha fazendo um snapshot dos campos de exibição do produto."""
        product_id = product.get('_id') or product.get('id')
        return cls(
            product_id=str(product_id),
            quantity=quantity,
            price=para_decimal(product.get('price')),
            name=product.get('name') or '',
            image=product.get('image'),
            size=normalizar_variacao(size),
            color=normalizar_variacao(color),
            extras={k: v for k, v in product.items() if k not in _CAMPOS_PRODUTO},
        )

    def to_dict(self) -> Dict[str, Any]:
        """Formato persistido no armazenamento local (preço como string)."""
        return {
            'product_id': self.product_id,
            'name': self.name,
            'price': str(self.price),
            'image': self.image,
            'quantity': self.quantity,
            'size': self.size,
            'color': self.color,
            'extras': dict(self.extras),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'CartLine':
        """
        Reconstrói a linha a partir do formato persistido.
        Aceita também o formato legado do navegador (`_id` e preço numérico).
        Levanta ValueError/TypeError/KeyError se o registro estiver malformado.
        """
        product_id = data.get('product_id') or data.get('_id')
        if not product_id:
            raise KeyError('product_id')

        quantity = data['quantity']
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValueError(f"Quantidade inválida no carrinho salvo: {quantity!r}")

        extras = data.get('extras')
        if extras is None:
            # Formato legado: o produto inteiro estava "espalhado" na linha.
            extras = {
                k: v for k, v in data.items()
                if k not in _CAMPOS_PRODUTO and k not in ('product_id', 'extras')
            }
        elif not isinstance(extras, dict):
            raise TypeError("O campo 'extras' deve ser um objeto.")

        return cls(
            product_id=str(product_id),
            quantity=quantity,
            price=para_decimal(data.get('price')),
            name=data.get('name') or '',
            image=data.get('image'),
            size=normalizar_variacao(data.get('size')),
            color=normalizar_variacao(data.get('color')),
            extras=dict(extras),
        )


@dataclass
class Cart:
    """Agregado do Carrinho. Totais são sempre recalculados a partir das linhas."""
    lines: List[CartLine] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return sum((line.subtotal for line in self.lines), Decimal('0'))

    @property
    def quantity(self) -> int:
        return sum(line.quantity for line in self.lines)


@dataclass
class UserProfile:
    """Perfil do usuário como devolvido pela API (`/api/users/profile`)."""
    id: str
    name: str
    email: str
    is_admin: bool = False
    extras: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> 'UserProfile':
        return cls(
            id=str(data.get('_id') or data.get('id') or ''),
            name=data.get('name') or '',
            email=data.get('email') or '',
            is_admin=bool(data.get('isAdmin', False)),
            extras={
                k: v for k, v in data.items()
                if k not in ('_id', 'id', 'name', 'email', 'isAdmin', 'token', 'password')
            },
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_id': self.id,
            'name': self.name,
            'email': self.email,
            'isAdmin': self.is_admin,
        }


@dataclass
class Session:
    """Par usuário autenticado + token bearer."""
    user: UserProfile
    token: str
