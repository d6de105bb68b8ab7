class BaseErroCore(Exception):
    """Classe base para todas as exceções da Camada Core."""
    message = "Ocorreu um erro inesperado."

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class DadosInvalidosError(BaseErroCore):
    """Erro levantado quando dados inválidos são fornecidos."""
    message = "Os dados fornecidos são inválidos."


class CategoriaNaoEncontradaError(DadosInvalidosError):
    """A categoria informada na venda não existe."""
    message = "Categoria inválida!"


class CpfJaCadastradoError(DadosInvalidosError):
    message = "CPF já cadastrado no sistema!"


class EmailJaCadastradoError(DadosInvalidosError):
    message = "Email já cadastrado no sistema!"


# ===============================================
# ERROS DE ACESSO E ENTIDADE
# ===============================================

MENSAGEM_VENDA_INACESSIVEL = "Venda não encontrada ou acesso negado."


class ItemNaoEncontradoError(BaseErroCore):
    """Erro levantado quando um item (genérico) não é encontrado."""
    message = "O item solicitado não foi encontrado."


class VendaNaoEncontradaError(ItemNaoEncontradoError):
    """Venda inexistente. Mensagem idêntica à de acesso negado."""
    message = MENSAGEM_VENDA_INACESSIVEL


class UsuarioNaoEncontradoError(ItemNaoEncontradoError):
    message = "Usuário não encontrado."


class AcessoNegadoError(BaseErroCore):
    """A venda existe, mas pertence a outro usuário."""
    message = MENSAGEM_VENDA_INACESSIVEL


class CredenciaisInvalidasError(BaseErroCore):
    message = "CPF ou senha incorretos."


# ===============================================
# ERROS DE INFRAESTRUTURA
# ===============================================

class PersistenciaError(BaseErroCore):
    """Falha de conexão ou de restrição no banco de dados."""
    message = "Não foi possível concluir a operação. Tente novamente."
