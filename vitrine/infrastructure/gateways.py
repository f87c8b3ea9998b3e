import logging
import requests
from decouple import config
from typing import Any, Dict, List, Optional

from vitrine.core.ports import IStorefrontApi
from vitrine.core.exceptions import ApiError

logger = logging.getLogger(__name__)


# ====================================================================
# GATEWAY: Implementação concreta que se comunica com a API REST da loja.
# ====================================================================

class StorefrontApiGateway(IStorefrontApi):
    """
    Gateway para a API REST da loja (produtos, pedidos, usuários).
    Implementa a interface IStorefrontApi do Core. Toda falha HTTP ou de rede
    é convertida em ApiError, com a mensagem da própria API quando existir.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 http: Optional[requests.Session] = None):
        self.api_base_url = (base_url or config('VITRINE_API_URL', default='http://localhost:5000')).rstrip('/')
        if timeout is None:
            timeout = config('VITRINE_API_TIMEOUT', default=15.0, cast=float)
        self.timeout = timeout
        self.http = http or requests.Session()

    # --- MÉTODOS PRIVADOS DE COMUNICAÇÃO ---

    def _headers(self, token: Optional[str]) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _request(self, method: str, path: str, token: Optional[str] = None,
                 json: Optional[Dict[str, Any]] = None, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.api_base_url}{path}"
        try:
            response = self.http.request(
                method, url, json=json, params=params, headers=self._headers(token), timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.warning("Erro de conexão com a API (%s %s): %s", method, url, e)
            raise ApiError(f"Erro de conexão com a API: {e}")

        if response.status_code >= 400:
            detail = None
            try:
                body = response.json()
                if isinstance(body, dict):
                    detail = body.get('message')
            except ValueError:
                pass
            logger.info("API respondeu %s para %s %s: %s", response.status_code, method, url, detail)
            raise ApiError(
                detail or f"A API respondeu com erro (HTTP {response.status_code}).",
                status_code=response.status_code,
                detail=detail,
            )

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            raise ApiError("Resposta inválida da API.", status_code=response.status_code)

    # --- Usuários e autenticação ---

    def login(self, email: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "/api/users/login", json={"email": email, "password": password})

    def registrar(self, name: str, email: str, password: str) -> Dict[str, Any]:
        return self._request(
            "POST", "/api/users/register", json={"name": name, "email": email, "password": password}
        )

    def buscar_perfil(self, token: str) -> Dict[str, Any]:
        return self._request("GET", "/api/users/profile", token=token)

    def listar_usuarios(self, token: str) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/users", token=token) or []

    def buscar_usuario(self, usuario_id: str, token: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/users/{usuario_id}", token=token)

    def atualizar_usuario(self, usuario_id: str, dados: Dict[str, Any], token: str) -> Dict[str, Any]:
        return self._request("PUT", f"/api/users/{usuario_id}", token=token, json=dados)

    def deletar_usuario(self, usuario_id: str, token: str) -> None:
        self._request("DELETE", f"/api/users/{usuario_id}", token=token)

    # --- Catálogo ---

    def listar_produtos(self, filtros: Optional[Dict[str, Any]] = None) -> Any:
        return self._request("GET", "/api/products", params=filtros or None)

    def buscar_produto(self, produto_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/products/{produto_id}")

    def listar_categorias(self) -> List[Any]:
        return self._request("GET", "/api/products/categories") or []

    def criar_produto(self, dados: Dict[str, Any], token: str) -> Dict[str, Any]:
        return self._request("POST", "/api/products", token=token, json=dados)

    def atualizar_produto(self, produto_id: str, dados: Dict[str, Any], token: str) -> Dict[str, Any]:
        return self._request("PUT", f"/api/products/{produto_id}", token=token, json=dados)

    def deletar_produto(self, produto_id: str, token: str) -> None:
        self._request("DELETE", f"/api/products/{produto_id}", token=token)

    # --- Pedidos ---

    def criar_pedido(self, pedido: Dict[str, Any], token: str) -> Dict[str, Any]:
        return self._request("POST", "/api/orders", token=token, json=pedido)

    def listar_pedidos(self, token: str) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/orders", token=token) or []

    def listar_meus_pedidos(self, token: str) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/orders/myorders", token=token) or []

    def buscar_pedido(self, pedido_id: str, token: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/orders/{pedido_id}", token=token)

    def atualizar_status_pedido(self, pedido_id: str, status: str, token: str) -> Dict[str, Any]:
        return self._request("PUT", f"/api/orders/{pedido_id}/status", token=token, json={"status": status})

    # --- Administração ---

    def obter_dashboard(self, token: str) -> Dict[str, Any]:
        return self._request("GET", "/api/admin/dashboard", token=token) or {}
