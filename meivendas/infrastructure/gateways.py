"""
Gateways da Camada de Infraestrutura.

Geração do PDF do Relatório Mensal de Receitas Brutas com ReportLab.
"""
import logging
from decimal import Decimal
from io import BytesIO
from typing import List
from xml.sax.saxutils import escape

from django.utils import timezone
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from meivendas.core.entities import ApuracaoMensal, Usuario, Venda
from meivendas.core.ports import IRelatorioRenderer

logger = logging.getLogger(__name__)

MESES = (
    "Janeiro", "Fevereiro", "Março", "Abril", "Maio", "Junho",
    "Julho", "Agosto", "Setembro", "Outubro", "Novembro", "Dezembro",
)

RODAPE_PADRAO = (
    "Relatório gerado automaticamente pelo Sistema MEI - "
    "Conforme exigências da Receita Federal do Brasil"
)


def formatar_moeda(valor) -> str:
    """Formata no padrão brasileiro: R$ 1.234,56."""
    texto = f"{Decimal(valor):,.2f}"
    return "R$ " + texto.replace(",", "_").replace(".", ",").replace("_", ".")


def nome_do_mes(mes: int) -> str:
    return MESES[mes - 1]


class RelatorioPDFReportLab(IRelatorioRenderer):
    """Implementação do IRelatorioRenderer usando o ReportLab (platypus)."""

    def __init__(self, rodape: str = RODAPE_PADRAO):
        self.rodape = rodape

    def _estilos(self):
        styles = getSampleStyleSheet()
        styles.add(ParagraphStyle(name='NormalLeft', alignment=TA_LEFT, fontSize=10, leading=13))
        styles.add(ParagraphStyle(name='TitleCenter', parent=styles['Heading1'], alignment=TA_CENTER, fontSize=16, spaceAfter=6))
        styles.add(ParagraphStyle(name='SubtitleCenter', parent=styles['Heading2'], alignment=TA_CENTER, fontSize=12, spaceAfter=12))
        styles.add(ParagraphStyle(name='SubHeader', parent=styles['Heading2'], fontSize=12, spaceBefore=12, spaceAfter=6))
        styles.add(ParagraphStyle(name='Rodape', alignment=TA_CENTER, fontSize=8, leading=10, fontName='Helvetica-Oblique'))
        styles.add(ParagraphStyle(name='RodapeData', alignment=TA_CENTER, fontSize=8, leading=10))
        return styles

    def renderizar(
        self,
        usuario: Usuario,
        mes: int,
        ano: int,
        vendas: List[Venda],
        apuracao: ApuracaoMensal,
    ) -> bytes:
        buffer = BytesIO()
        styles = self._estilos()

        doc = SimpleDocTemplate(
            buffer, pagesize=A4,
            leftMargin=1.5*cm, rightMargin=1.5*cm, topMargin=1.5*cm, bottomMargin=1.5*cm,
            title=f"Relatório Mensal {mes:02d}/{ano}",
        )
        Story = []

        # 1. Cabeçalho e dados do MEI
        Story.append(Paragraph("RELATÓRIO MENSAL DE RECEITAS BRUTAS", styles['TitleCenter']))
        Story.append(Paragraph("MICROEMPREENDEDOR INDIVIDUAL (MEI)", styles['SubtitleCenter']))
        Story.append(self._tabela_dados(usuario, mes, ano))

        # 2. Receitas do mês
        Story.append(Paragraph("RECEITAS DO MÊS", styles['SubHeader']))
        Story.append(self._tabela_receitas(apuracao))

        # 3. Detalhamento
        Story.append(Paragraph("DETALHAMENTO DAS VENDAS", styles['SubHeader']))
        Story.append(self._tabela_vendas(vendas, styles["NormalLeft"]))

        # 4. Rodapé
        Story.append(Spacer(1, 1*cm))
        Story.append(Paragraph(self.rodape, styles['Rodape']))
        emitido_em = timezone.localtime().strftime("%d/%m/%Y")
        Story.append(Paragraph(f"Emitido em: {emitido_em}", styles['RodapeData']))

        doc.build(Story)
        logger.debug("PDF de %02d/%d renderizado (%d vendas).", mes, ano, len(vendas))
        return buffer.getvalue()

    def _tabela_dados(self, usuario: Usuario, mes: int, ano: int) -> Table:
        dados = [
            ["Nome:", usuario.nome],
            ["CPF:", usuario.cpf_formatado],
            ["Período:", f"{nome_do_mes(mes)}/{ano}"],
        ]
        t = Table(dados, colWidths=[5*cm, 13*cm])
        t.setStyle(TableStyle([
            ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
            ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ]))
        return t

    def _tabela_receitas(self, apuracao: ApuracaoMensal) -> Table:
        dados = [
            ["", "COM NF", "SEM NF"],
            ["I - Revenda de Mercadorias",
             formatar_moeda(apuracao.revenda_com_nf), formatar_moeda(apuracao.revenda_sem_nf)],
            ["II - Produtos Industrializados",
             formatar_moeda(apuracao.industrializado_com_nf), formatar_moeda(apuracao.industrializado_sem_nf)],
            ["III - Prestação de Serviços",
             formatar_moeda(apuracao.servico_com_nf), formatar_moeda(apuracao.servico_sem_nf)],
            ["TOTAL GERAL", formatar_moeda(apuracao.total), ""],
        ]
        t = Table(dados, colWidths=[8*cm, 5*cm, 5*cm])
        t.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), colors.grey),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTNAME', (0, 1), (0, -1), 'Helvetica-Bold'),
            ('ALIGN', (1, 0), (-1, -1), 'RIGHT'),
            ('GRID', (0, 0), (-1, -1), 1, colors.black),
            # Total geral ocupa as duas colunas de valores
            ('SPAN', (1, -1), (2, -1)),
            ('ALIGN', (1, -1), (2, -1), 'CENTER'),
            ('BACKGROUND', (0, -1), (-1, -1), colors.lightgrey),
            ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),
        ]))
        return t

    def _tabela_vendas(self, vendas: List[Venda], estilo_texto: ParagraphStyle) -> Table:
        dados = [["Data", "Categoria", "Descrição", "NF", "Valor"]]
        for venda in vendas:
            dados.append([
                timezone.localtime(venda.data).strftime("%d/%m/%Y"),
                venda.nome_categoria,
                # Paragraph quebra descrições longas dentro da célula
                Paragraph(escape(venda.descricao or "-"), estilo_texto),
                venda.nota_fiscal_emitida,
                formatar_moeda(venda.valor),
            ])
        t = Table(dados, colWidths=[2.5*cm, 4.5*cm, 6.5*cm, 1.5*cm, 3*cm], repeatRows=1)
        t.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), colors.grey),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 1), (-1, -1), 9),
            ('ALIGN', (3, 0), (3, -1), 'CENTER'),
            ('ALIGN', (4, 0), (4, -1), 'RIGHT'),
            ('GRID', (0, 0), (-1, -1), 0.5, colors.black),
        ]))
        return t
