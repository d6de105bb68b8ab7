# meivendas/core/dependency_injection.py
"""
Módulo de Injeção de Dependência (DI).
Responsável por instanciar os Use Cases com suas dependências de Repositórios/Gateways
concretos da camada de Infraestrutura.
Deve ser importado somente depois que o Django estiver configurado.
"""
from django.utils import timezone

from meivendas.infrastructure.instances import (
    venda_repo,
    categoria_repo,
    usuario_repo,
    relatorio_renderer,
)
from .use_cases import (
    RegistrarVendaUseCase,
    DetalharVendaUseCase,
    EditarVendaUseCase,
    ExcluirVendaUseCase,
    ListarCategoriasUseCase,
    PainelVendasUseCase,
    HistoricoVendasUseCase,
    GerarRelatorioMensalUseCase,
    CadastrarUsuarioUseCase,
    AutenticarUsuarioUseCase,
    AtualizarPerfilUseCase,
    AlterarSenhaUseCase,
)

# Datas "correntes" (mês do painel, ano do histórico) seguem o TIME_ZONE do projeto.
relogio = timezone.localtime


# ====================================================================
# Use Cases de Vendas
# ====================================================================

def get_registrar_venda_use_case() -> RegistrarVendaUseCase:
    return RegistrarVendaUseCase(venda_repo, categoria_repo, relogio=relogio)

def get_detalhar_venda_use_case() -> DetalharVendaUseCase:
    return DetalharVendaUseCase(venda_repo)

def get_editar_venda_use_case() -> EditarVendaUseCase:
    return EditarVendaUseCase(venda_repo, categoria_repo, relogio=relogio)

def get_excluir_venda_use_case() -> ExcluirVendaUseCase:
    return ExcluirVendaUseCase(venda_repo)


# ====================================================================
# Use Cases de Consulta e Relatório
# ====================================================================

def get_listar_categorias_use_case() -> ListarCategoriasUseCase:
    return ListarCategoriasUseCase(categoria_repo)

def get_painel_vendas_use_case() -> PainelVendasUseCase:
    return PainelVendasUseCase(venda_repo, relogio=relogio)

def get_historico_vendas_use_case() -> HistoricoVendasUseCase:
    return HistoricoVendasUseCase(venda_repo, relogio=relogio)

def get_gerar_relatorio_mensal_use_case() -> GerarRelatorioMensalUseCase:
    return GerarRelatorioMensalUseCase(
        venda_repo=venda_repo,
        relatorio_renderer=relatorio_renderer
    )


# ====================================================================
# Use Cases de Conta
# ====================================================================

def get_cadastrar_usuario_use_case() -> CadastrarUsuarioUseCase:
    return CadastrarUsuarioUseCase(usuario_repo)

def get_autenticar_usuario_use_case() -> AutenticarUsuarioUseCase:
    return AutenticarUsuarioUseCase(usuario_repo)

def get_atualizar_perfil_use_case() -> AtualizarPerfilUseCase:
    return AtualizarPerfilUseCase(usuario_repo)

def get_alterar_senha_use_case() -> AlterarSenhaUseCase:
    return AlterarSenhaUseCase(usuario_repo)
