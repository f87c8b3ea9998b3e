# vitrine/core/cart_store.py
# Gerencia o estado e a persistência do Carrinho de Compras no armazenamento local do visitante.

import json
import logging
from collections import deque
from decimal import Decimal
from typing import Any, Deque, List, Mapping, Optional

from vitrine.core.entities import Cart, CartLine, normalizar_variacao
from vitrine.core.exceptions import DadosInvalidosError, QuantidadeInvalidaError
from vitrine.core.ports import ILocalStorage

logger = logging.getLogger(__name__)


def _validar_quantidade(quantidade: Any) -> int:
    if isinstance(quantidade, bool) or not isinstance(quantidade, int):
        raise QuantidadeInvalidaError(quantidade)
    return quantidade


class CartStore:
    """
    Mantém o carrinho autoritativo do lado do cliente.

    O carrinho é lido do armazenamento local na construção (fase de carregamento)
    e reescrito por inteiro após cada mutação. Escritas passam por uma fila FIFO
    interna; com `autoflush` cada escrita é drenada imediatamente.
    """

    STORAGE_KEY = 'cart'

    def __init__(self, storage: ILocalStorage, autoflush: bool = True):
        """Inicializa o CartStore e carrega o carrinho do armazenamento."""
        self.storage = storage
        self.autoflush = autoflush
        self._pending: Deque[str] = deque()
        self.loading = True
        self.carrinho: Cart = self._load_carrinho()
        self.loading = False

    # --- Métodos de Persistência ---

    def _load_carrinho(self) -> Cart:
        """
        Carrega o Carrinho do armazenamento local.
        Conteúdo ausente, corrompido ou malformado resulta em um carrinho vazio.
        """
        try:
            raw_cart = self.storage.get_item(self.STORAGE_KEY)
        except Exception:
            logger.warning("Não foi possível ler o carrinho do armazenamento local.", exc_info=True)
            return Cart()

        if not raw_cart:
            return Cart()

        try:
            data = json.loads(raw_cart)
            if not isinstance(data, list):
                raise TypeError("O carrinho salvo deve ser uma lista.")
            lines = [CartLine.from_dict(item) for item in data]
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning("Carrinho salvo inválido, iniciando vazio: %s", e)
            return Cart()

        # Linhas duplicadas (mesma chave) são fundidas para manter a invariante.
        carrinho = Cart()
        for line in lines:
            existing = self._find(carrinho, line.product_id, line.size, line.color)
            if existing:
                existing.quantity += line.quantity
            else:
                carrinho.lines.append(line)
        return carrinho

    def _save_carrinho(self):
        """Enfileira a serialização completa do carrinho. Suprimido durante o carregamento."""
        if self.loading:
            return
        payload = json.dumps([line.to_dict() for line in self.carrinho.lines])
        self._pending.append(payload)
        if self.autoflush:
            self.flush()

    def flush(self) -> int:
        """
        Drena a fila de escritas em ordem (a última escrita vence).
        Falhas de escrita são registradas no log e não chegam ao chamador.
        Retorna quantas escritas foram tentadas.
        """
        tentativas = 0
        while self._pending:
            payload = self._pending.popleft()
            tentativas += 1
            try:
                self.storage.set_item(self.STORAGE_KEY, payload)
            except Exception:
                logger.warning("Falha ao salvar o carrinho no armazenamento local.", exc_info=True)
        return tentativas

    @property
    def pending_writes(self) -> List[str]:
        """Escritas ainda não drenadas (usado quando autoflush=False)."""
        return list(self._pending)

    # --- Métodos de Manipulação ---

    @staticmethod
    def _find(carrinho: Cart, product_id, size, color) -> Optional[CartLine]:
        key = (str(product_id), normalizar_variacao(size), normalizar_variacao(color))
        return next((line for line in carrinho.lines if line.key == key), None)

    def get_line(self, product_id, size=None, color=None) -> Optional[CartLine]:
        return self._find(self.carrinho, product_id, size, color)

    def add_to_cart(self, product: Mapping[str, Any], quantity: int = 1, size=None, color=None) -> CartLine:
        """
        Adiciona o produto ao carrinho. Se já existir uma linha com a mesma chave
        (produto, tamanho, cor), a quantidade é somada; senão uma nova linha é criada
        com um snapshot dos dados de exibição do produto.
        """
        quantity = _validar_quantidade(quantity)
        if quantity < 1:
            raise QuantidadeInvalidaError(quantity)

        product_id = product.get('_id') or product.get('id')
        if not product_id:
            raise DadosInvalidosError("O produto não possui identificador.")

        existing = self._find(self.carrinho, product_id, size, color)
        if existing:
            existing.quantity += quantity
            line = existing
        else:
            try:
                line = CartLine.from_product(product, quantity, size=size, color=color)
            except ValueError as e:
                raise DadosInvalidosError(f"Produto com dados inválidos: {e}")
            self.carrinho.lines.append(line)

        self._save_carrinho()
        return line

    def update_cart_item(self, product_id, quantity: int, size=None, color=None):
        """
        Define (não soma) a quantidade da linha correspondente.
        Quantidade <= 0 remove a linha. Sem linha correspondente, nada acontece.
        """
        quantity = _validar_quantidade(quantity)
        existing = self._find(self.carrinho, product_id, size, color)
        if not existing:
            return

        if quantity <= 0:
            self.remove_from_cart(product_id, size=size, color=color)
            return

        existing.quantity = quantity
        self._save_carrinho()

    def remove_from_cart(self, product_id, size=None, color=None):
        """Remove a linha correspondente, se existir."""
        existing = self._find(self.carrinho, product_id, size, color)
        if not existing:
            return
        self.carrinho.lines = [line for line in self.carrinho.lines if line is not existing]
        self._save_carrinho()

    def clear_cart(self):
        """Esvazia o carrinho (usado após o checkout)."""
        self.carrinho = Cart()
        self._save_carrinho()

    # --- Métodos de Consulta ---

    @property
    def lines(self) -> List[CartLine]:
        return list(self.carrinho.lines)

    @property
    def cart_total(self) -> Decimal:
        return self.carrinho.total

    @property
    def cart_quantity(self) -> int:
        return self.carrinho.quantity

    def is_empty(self) -> bool:
        """Verifica se o carrinho está vazio."""
        return not self.carrinho.lines
