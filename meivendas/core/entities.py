from dataclasses import dataclass, field
from decimal import Decimal
from datetime import datetime, timezone
from typing import List, Optional


# ====================================================================
# ENTIDADES CORE
# Representam os objetos de negócio puros.
# ====================================================================

NF_EMITIDA = "S"
NF_NAO_EMITIDA = "N"


def agora() -> datetime:
    """Instante atual com fuso (UTC). Único tipo de data usado no sistema."""
    return datetime.now(timezone.utc)


@dataclass
class Usuario:
    """Entidade do Usuário (MEI). O CPF é a chave de login."""
    cpf: str
    nome: str
    email: Optional[str] = None
    cnpj: Optional[str] = None
    id: Optional[int] = None

    @property
    def cpf_formatado(self) -> str:
        """Retorna o CPF no formato 000.000.000-00."""
        if not self.cpf or len(self.cpf) != 11:
            return self.cpf
        return f"{self.cpf[:3]}.{self.cpf[3:6]}.{self.cpf[6:9]}-{self.cpf[9:]}"


@dataclass
class Categoria:
    """Entidade de Categoria de venda (Revenda, Produtos Industrializados, Serviços...)."""
    nome: str
    ativo: bool = True
    id: Optional[int] = None


@dataclass
class NotaFiscal:
    """Nota Fiscal emitida para uma venda. O valor acompanha o valor da venda."""
    numero: str
    valor: Decimal
    usuario_id: int
    data_emissao: datetime = field(default_factory=agora)
    venda_id: Optional[int] = None
    id: Optional[int] = None


@dataclass
class Venda:
    """Entidade da Venda registrada pelo MEI."""
    valor: Decimal
    categoria: Categoria
    usuario_id: int
    nota_fiscal_emitida: str = NF_NAO_EMITIDA
    descricao: str = ""
    nota_fiscal: Optional[NotaFiscal] = None
    data: datetime = field(default_factory=agora)
    id: Optional[int] = None

    @property
    def nota_emitida(self) -> bool:
        return self.nota_fiscal_emitida == NF_EMITIDA

    @property
    def nome_categoria(self) -> str:
        return self.categoria.nome if self.categoria else ""


@dataclass(frozen=True)
class ApuracaoMensal:
    """
    Resultado da apuração mensal: seis totais (categoria x emissão de NF)
    e o total geral.
    """
    revenda_com_nf: Decimal = Decimal("0.00")
    revenda_sem_nf: Decimal = Decimal("0.00")
    industrializado_com_nf: Decimal = Decimal("0.00")
    industrializado_sem_nf: Decimal = Decimal("0.00")
    servico_com_nf: Decimal = Decimal("0.00")
    servico_sem_nf: Decimal = Decimal("0.00")
    nao_classificadas: int = 0

    @property
    def buckets(self) -> tuple:
        return (
            self.revenda_com_nf,
            self.revenda_sem_nf,
            self.industrializado_com_nf,
            self.industrializado_sem_nf,
            self.servico_com_nf,
            self.servico_sem_nf,
        )

    @property
    def total(self) -> Decimal:
        return sum(self.buckets, Decimal("0.00"))


@dataclass
class RelatorioGerado:
    """Arquivo PDF pronto para download."""
    nome_arquivo: str
    conteudo: bytes
    content_type: str = "application/pdf"


@dataclass
class HistoricoVendas:
    """Consolidação anual exibida na tela de histórico."""
    ano: int
    filtro_nf: str
    anos: List[int]
    vendas: List[Venda]
    total_vendas: int = 0
    total_valor: Decimal = Decimal("0.00")
    total_com_nf: int = 0
    total_sem_nf: int = 0
    valor_com_nf: Decimal = Decimal("0.00")
    valor_sem_nf: Decimal = Decimal("0.00")


@dataclass
class PainelVendas:
    """Dados do painel inicial: últimas vendas e total do mês corrente."""
    ultimas_vendas: List[Venda]
    total_mes: Decimal = Decimal("0.00")
