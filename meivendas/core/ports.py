# meivendas/core/ports.py
"""
Definição das Portas (Interfaces/Protocolos) da Arquitetura Limpa.

Estes protocolos definem o contrato que a camada de Infraestrutura (Repositórios, Gateways)
DEVE seguir para se conectar à camada Core (Casos de Uso). Toda falha do banco de dados
deve chegar ao Core como PersistenciaError.
"""

from typing import Protocol, List, Optional
from abc import abstractmethod

from meivendas.core.entities import (
    Venda, Categoria, Usuario, ApuracaoMensal
)


# ====================================================================
# 1. REPOSITÓRIOS (Portas de Persistência)
# ====================================================================

class IVendaRepository(Protocol):
    """Protocolo para a persistência e busca de Vendas (e suas Notas Fiscais)."""

    @abstractmethod
    def registrar(self, venda: Venda) -> Venda:
        """
        Insere a Nota Fiscal (quando houver) e depois a Venda, em uma única
        transação. Devolve a venda com os ids gerados.
        """
        ...

    @abstractmethod
    def atualizar(self, venda: Venda) -> Venda: ...

    @abstractmethod
    def buscar_por_id(self, venda_id: int) -> Optional[Venda]: ...

    @abstractmethod
    def listar_por_periodo(self, usuario_id: int, mes: int, ano: int) -> List[Venda]: ...

    @abstractmethod
    def listar_recentes(self, usuario_id: int, limite: int = 10) -> List[Venda]: ...

    @abstractmethod
    def listar_por_ano(self, usuario_id: int, ano: int, filtro_nf: str = "todas") -> List[Venda]: ...

    @abstractmethod
    def listar_anos_com_vendas(self, usuario_id: int) -> List[int]: ...

    @abstractmethod
    def deletar(self, venda_id: int) -> None: ...


class ICategoriaRepository(Protocol):
    """Protocolo para a busca de Categorias."""

    @abstractmethod
    def buscar_por_id(self, categoria_id: int) -> Optional[Categoria]: ...

    @abstractmethod
    def listar_ativas(self) -> List[Categoria]: ...


class IUsuarioRepository(Protocol):
    """Protocolo para a persistência de Usuários. A senha nunca sai da infraestrutura."""

    @abstractmethod
    def buscar_por_id(self, usuario_id: int) -> Optional[Usuario]: ...

    @abstractmethod
    def buscar_por_cpf(self, cpf: str) -> Optional[Usuario]: ...

    @abstractmethod
    def buscar_por_email(self, email: str) -> Optional[Usuario]: ...

    @abstractmethod
    def criar(self, usuario: Usuario, senha: str) -> Usuario: ...

    @abstractmethod
    def atualizar(self, usuario: Usuario) -> Usuario: ...

    @abstractmethod
    def verificar_senha(self, usuario_id: int, senha: str) -> bool: ...

    @abstractmethod
    def definir_senha(self, usuario_id: int, senha: str) -> None: ...


# ====================================================================
# 2. GATEWAYS (Portas de Serviços Externos)
# ====================================================================

class IRelatorioRenderer(Protocol):
    """Protocolo para a geração do documento do relatório mensal."""

    @abstractmethod
    def renderizar(
        self,
        usuario: Usuario,
        mes: int,
        ano: int,
        vendas: List[Venda],
        apuracao: ApuracaoMensal,
    ) -> bytes: ...
