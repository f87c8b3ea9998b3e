from typing import Optional


class BaseErroCore(Exception):
    """Classe base para todas as exceções da Camada Core."""
    pass

class DadosInvalidosError(BaseErroCore):
    """Erro levantado quando dados inválidos são fornecidos."""
    def __init__(self, message="Os dados fornecidos são inválidos."):
        self.message = message
        super().__init__(self.message)

class QuantidadeInvalidaError(DadosInvalidosError):
    """Erro levantado quando a quantidade de um item não é um inteiro positivo."""
    def __init__(self, quantidade=None, message=None):
        self.quantidade = quantidade
        if message is None:
            message = f"A quantidade deve ser um número inteiro positivo (recebido: {quantidade!r})."
        super().__init__(message)

# ===============================================
# ERROS DE FLUXO DE COMPRA
# ===============================================

class CarrinhoVazioError(BaseErroCore):
    """Erro levantado ao tentar fazer checkout com carrinho vazio."""
    def __init__(self, message="O carrinho de compras está vazio."):
        self.message = message
        super().__init__(self.message)

class StatusInvalidoError(BaseErroCore):
    """Erro levantado ao tentar definir um status de pedido inválido."""
    def __init__(self, message="O status fornecido não é válido para um pedido."):
        self.message = message
        super().__init__(self.message)

# ===============================================
# ERROS DE COMUNICAÇÃO E ACESSO
# ===============================================

class ApiError(BaseErroCore):
    """
    Erro levantado quando a API remota falha ou não responde.
    `status_code` é None para falhas de rede (conexão recusada, timeout).
    `detail` guarda a mensagem enviada pela própria API, quando houver.
    """
    def __init__(self, message="Falha na comunicação com a API.", status_code: Optional[int] = None,
                 detail: Optional[str] = None):
        self.message = message
        self.status_code = status_code
        self.detail = detail
        super().__init__(self.message)

class AcessoNegadoError(BaseErroCore):
    """Erro levantado quando a sessão não está autenticada ou não é de administrador."""
    def __init__(self, message="Você não tem permissão para acessar este recurso."):
        self.message = message
        super().__init__(self.message)
