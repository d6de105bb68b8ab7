"""
Módulo de inicialização dos repositórios e gateways.
Deve ser importado somente depois que o Django estiver configurado.
"""
from django.conf import settings

from .repositories import (
    VendaRepositoryDjango as VendaRepository,
    CategoriaRepositoryDjango as CategoriaRepository,
    UsuarioRepositoryDjango as UsuarioRepository,
)
from .gateways import RelatorioPDFReportLab, RODAPE_PADRAO

# Instâncias globais (sem estado) dos repositórios
venda_repo = VendaRepository()
categoria_repo = CategoriaRepository()
usuario_repo = UsuarioRepository()
relatorio_renderer = RelatorioPDFReportLab(
    rodape=getattr(settings, 'RELATORIO_RODAPE', RODAPE_PADRAO)
)
