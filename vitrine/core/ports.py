# vitrine/core/ports.py
"""
Definição das Portas (Interfaces/Protocolos) da Arquitetura Limpa.

Estes protocolos definem o contrato que a camada de Infraestrutura (armazenamento
local, gateway da API remota) DEVE seguir para se conectar à camada Core.
"""

from typing import Protocol, List, Optional, Dict, Any
from abc import abstractmethod


# ====================================================================
# 1. ARMAZENAMENTO LOCAL (Porta de Persistência do lado do cliente)
# ====================================================================

class ILocalStorage(Protocol):
    """
    Armazenamento chave/valor de strings pertencente ao visitante.
    Chaves usadas pelo Core: 'cart' e 'token'.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]: ...

    @abstractmethod
    def set_item(self, key: str, value: str) -> None: ...

    @abstractmethod
    def remove_item(self, key: str) -> None: ...


# ====================================================================
# 2. GATEWAY DA API REMOTA (Porta de Serviço Externo)
# ====================================================================

class IStorefrontApi(Protocol):
    """
    Protocolo para a API REST da loja. Todas as falhas (HTTP ou rede)
    DEVEM ser levantadas como ApiError.
    """

    # --- Usuários e autenticação ---
    @abstractmethod
    def login(self, email: str, password: str) -> Dict[str, Any]: ...

    @abstractmethod
    def registrar(self, name: str, email: str, password: str) -> Dict[str, Any]: ...

    @abstractmethod
    def buscar_perfil(self, token: str) -> Dict[str, Any]: ...

    @abstractmethod
    def listar_usuarios(self, token: str) -> List[Dict[str, Any]]: ...

    @abstractmethod
    def buscar_usuario(self, usuario_id: str, token: str) -> Dict[str, Any]: ...

    @abstractmethod
    def atualizar_usuario(self, usuario_id: str, dados: Dict[str, Any], token: str) -> Dict[str, Any]: ...

    @abstractmethod
    def deletar_usuario(self, usuario_id: str, token: str) -> None: ...

    # --- Catálogo ---
    @abstractmethod
    def listar_produtos(self, filtros: Optional[Dict[str, Any]] = None) -> Any: ...

    @abstractmethod
    def buscar_produto(self, produto_id: str) -> Dict[str, Any]: ...

    @abstractmethod
    def listar_categorias(self) -> List[Any]: ...

    @abstractmethod
    def criar_produto(self, dados: Dict[str, Any], token: str) -> Dict[str, Any]: ...

    @abstractmethod
    def atualizar_produto(self, produto_id: str, dados: Dict[str, Any], token: str) -> Dict[str, Any]: ...

    @abstractmethod
    def deletar_produto(self, produto_id: str, token: str) -> None: ...

    # --- Pedidos ---
    @abstractmethod
    def criar_pedido(self, pedido: Dict[str, Any], token: str) -> Dict[str, Any]: ...

    @abstractmethod
    def listar_pedidos(self, token: str) -> List[Dict[str, Any]]: ...

    @abstractmethod
    def listar_meus_pedidos(self, token: str) -> List[Dict[str, Any]]: ...

    @abstractmethod
    def buscar_pedido(self, pedido_id: str, token: str) -> Dict[str, Any]: ...

    @abstractmethod
    def atualizar_status_pedido(self, pedido_id: str, status: str, token: str) -> Dict[str, Any]: ...

    # --- Administração ---
    @abstractmethod
    def obter_dashboard(self, token: str) -> Dict[str, Any]: ...
