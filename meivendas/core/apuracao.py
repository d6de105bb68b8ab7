# meivendas/core/apuracao.py
"""
Apuração mensal das receitas brutas do MEI.

Cada venda é classificada pelo nome da categoria em uma das três linhas do
relatório (Revenda de Mercadorias, Produtos Industrializados, Prestação de
Serviços) e separada pela emissão de Nota Fiscal, gerando seis totais.
"""
import logging
from decimal import Decimal
from typing import Iterable, Optional

from meivendas.core.entities import ApuracaoMensal, Venda

logger = logging.getLogger(__name__)

REVENDA = "revenda"
INDUSTRIALIZADO = "industrializado"
SERVICO = "servico"

# Ordem importa: a primeira classe cujo padrão aparece no nome vence.
PADROES_CLASSE = (
    (REVENDA, ("revenda", "mercadoria")),
    (INDUSTRIALIZADO, ("industrial", "produto")),
    (SERVICO, ("servi",)),
)


def classificar_categoria(nome_categoria: Optional[str]) -> Optional[str]:
    """Retorna a classe da categoria, ou None quando nenhum padrão casa."""
    nome = (nome_categoria or "").lower()
    for classe, padroes in PADROES_CLASSE:
        if any(padrao in nome for padrao in padroes):
            return classe
    return None


def apurar_receitas(vendas: Iterable[Venda]) -> ApuracaoMensal:
    """
    Soma os valores das vendas nos seis totais do relatório.

    Vendas de categorias não reconhecidas ficam fora dos totais e são apenas
    contadas em `nao_classificadas`. As vendas recebidas não são alteradas.
    """
    totais = {
        f"{classe}_{sufixo}": Decimal("0.00")
        for classe, _ in PADROES_CLASSE
        for sufixo in ("com_nf", "sem_nf")
    }
    nao_classificadas = 0

    for venda in vendas:
        classe = classificar_categoria(venda.nome_categoria)
        if classe is None:
            nao_classificadas += 1
            continue
        sufixo = "com_nf" if venda.nota_emitida else "sem_nf"
        totais[f"{classe}_{sufixo}"] += Decimal(venda.valor)

    if nao_classificadas:
        logger.info(
            "%d venda(s) com categoria não reconhecida ficaram fora da apuração.",
            nao_classificadas,
        )

    return ApuracaoMensal(nao_classificadas=nao_classificadas, **totais)
