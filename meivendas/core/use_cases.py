# meivendas/core/use_cases.py
"""
Implementação dos Casos de Uso (Lógica de Negócio) da aplicação.
Esta camada depende apenas das Entidades e Portas (Interfaces) do Core,
garantindo o isolamento da lógica de negócio.

O usuário autenticado chega sempre como parâmetro (usuario_id); nenhum caso de uso
lê sessão ou conexão global.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable, List, Optional

# Entidades e Exceções
from meivendas.core.entities import (
    Venda, Categoria, NotaFiscal, Usuario, HistoricoVendas, PainelVendas,
    RelatorioGerado, NF_EMITIDA, agora
)
from meivendas.core.exceptions import (
    AcessoNegadoError,
    CategoriaNaoEncontradaError,
    CpfJaCadastradoError,
    CredenciaisInvalidasError,
    DadosInvalidosError,
    EmailJaCadastradoError,
    UsuarioNaoEncontradoError,
    VendaNaoEncontradaError,
)
from meivendas.core.apuracao import apurar_receitas
from meivendas.core.validadores import (
    ANO_MAXIMO,
    ANO_MINIMO,
    normalizar_cnpj,
    normalizar_cpf,
    normalizar_flag_nf,
    parse_valor_monetario,
    validar_nova_senha,
    validar_periodo,
)

# Portas (Interfaces) - Importadas do meivendas/core/ports.py
from meivendas.core.ports import (
    IVendaRepository,
    ICategoriaRepository,
    IUsuarioRepository,
    IRelatorioRenderer,
)

logger = logging.getLogger(__name__)

FILTROS_NF = ("todas", "com", "sem")


# ====================================================================
# 1. CASOS DE USO DE VENDAS
# ====================================================================

class _DadosVenda:
    """Campos de uma venda já validados, compartilhados entre cadastro e edição."""

    def __init__(self, categoria_repo: ICategoriaRepository, valor_bruto, nota_fiscal_emitida,
                 categoria_id, descricao, numero_nota):
        if categoria_id in (None, ""):
            raise DadosInvalidosError("Categoria é obrigatória!")

        self.valor = parse_valor_monetario(valor_bruto)
        self.flag_nf = normalizar_flag_nf(nota_fiscal_emitida)
        self.numero_nota = (numero_nota or "").strip()

        if self.flag_nf == NF_EMITIDA and not self.numero_nota:
            raise DadosInvalidosError("Número da Nota Fiscal é obrigatório!")

        try:
            categoria_id = int(categoria_id)
        except (TypeError, ValueError):
            raise CategoriaNaoEncontradaError()

        categoria = categoria_repo.buscar_por_id(categoria_id)
        if categoria is None:
            raise CategoriaNaoEncontradaError()
        self.categoria: Categoria = categoria
        self.descricao = (descricao or "").strip()


class RegistrarVendaUseCase:
    """
    Caso de Uso que valida e registra uma venda, com Nota Fiscal opcional.
    A nota é persistida antes da venda, na mesma transação do repositório.
    """
    def __init__(self, venda_repo: IVendaRepository, categoria_repo: ICategoriaRepository,
                 relogio: Callable[[], datetime] = agora):
        self.venda_repo = venda_repo
        self.categoria_repo = categoria_repo
        self.relogio = relogio

    def executar(
        self,
        usuario_id: int,
        valor_bruto,
        nota_fiscal_emitida: Optional[str],
        categoria_id,
        descricao: Optional[str] = None,
        numero_nota: Optional[str] = None,
        data_emissao_nota: Optional[datetime] = None,
    ) -> Venda:
        """Valida os campos do formulário e persiste a venda."""
        dados = _DadosVenda(
            self.categoria_repo, valor_bruto, nota_fiscal_emitida,
            categoria_id, descricao, numero_nota
        )
        momento = self.relogio()

        nota_fiscal = None
        if dados.flag_nf == NF_EMITIDA:
            nota_fiscal = NotaFiscal(
                numero=dados.numero_nota,
                valor=dados.valor,
                usuario_id=usuario_id,
                data_emissao=data_emissao_nota or momento,
            )

        venda = Venda(
            valor=dados.valor,
            categoria=dados.categoria,
            usuario_id=usuario_id,
            nota_fiscal_emitida=dados.flag_nf,
            descricao=dados.descricao,
            nota_fiscal=nota_fiscal,
            data=momento,
        )

        venda_salva = self.venda_repo.registrar(venda)
        logger.info(
            "Venda %s registrada para o usuário %s (valor=%s, NF=%s).",
            venda_salva.id, usuario_id, venda_salva.valor, venda_salva.nota_fiscal_emitida
        )
        return venda_salva


def _buscar_venda_do_usuario(venda_repo: IVendaRepository, usuario_id: int, venda_id) -> Venda:
    """Busca a venda garantindo que pertence ao usuário solicitante."""
    try:
        venda_id = int(venda_id)
    except (TypeError, ValueError):
        raise VendaNaoEncontradaError()

    venda = venda_repo.buscar_por_id(venda_id)
    if venda is None:
        raise VendaNaoEncontradaError()
    if venda.usuario_id != usuario_id:
        logger.warning(
            "Usuário %s tentou acessar a venda %s de outro usuário.", usuario_id, venda_id
        )
        raise AcessoNegadoError()
    return venda


class DetalharVendaUseCase:
    """Caso de Uso para obter uma venda do próprio usuário."""
    def __init__(self, venda_repo: IVendaRepository):
        self.venda_repo = venda_repo

    def executar(self, usuario_id: int, venda_id) -> Venda:
        return _buscar_venda_do_usuario(self.venda_repo, usuario_id, venda_id)


class EditarVendaUseCase:
    """
    Caso de Uso de edição de venda. Mantém a data original; cria, atualiza ou
    desvincula a Nota Fiscal conforme a nova indicação.
    """
    def __init__(self, venda_repo: IVendaRepository, categoria_repo: ICategoriaRepository,
                 relogio: Callable[[], datetime] = agora):
        self.venda_repo = venda_repo
        self.categoria_repo = categoria_repo
        self.relogio = relogio

    def executar(
        self,
        usuario_id: int,
        venda_id,
        valor_bruto,
        nota_fiscal_emitida: Optional[str],
        categoria_id,
        descricao: Optional[str] = None,
        numero_nota: Optional[str] = None,
    ) -> Venda:
        venda = _buscar_venda_do_usuario(self.venda_repo, usuario_id, venda_id)
        dados = _DadosVenda(
            self.categoria_repo, valor_bruto, nota_fiscal_emitida,
            categoria_id, descricao, numero_nota
        )

        venda.valor = dados.valor
        venda.categoria = dados.categoria
        venda.descricao = dados.descricao
        venda.nota_fiscal_emitida = dados.flag_nf

        if dados.flag_nf == NF_EMITIDA:
            if venda.nota_fiscal is None:
                venda.nota_fiscal = NotaFiscal(
                    numero=dados.numero_nota,
                    valor=dados.valor,
                    usuario_id=usuario_id,
                    data_emissao=self.relogio(),
                    venda_id=venda.id,
                )
            else:
                venda.nota_fiscal.numero = dados.numero_nota
                venda.nota_fiscal.valor = dados.valor
        else:
            venda.nota_fiscal = None

        venda_salva = self.venda_repo.atualizar(venda)
        logger.info("Venda %s atualizada pelo usuário %s.", venda_salva.id, usuario_id)
        return venda_salva


class ExcluirVendaUseCase:
    """
    Caso de Uso de exclusão. Venda inexistente e venda de outro usuário produzem
    a mesma mensagem, para não revelar a existência do registro.
    A Nota Fiscal vinculada não é removida.
    """
    def __init__(self, venda_repo: IVendaRepository):
        self.venda_repo = venda_repo

    def executar(self, usuario_id: int, venda_id) -> None:
        venda = _buscar_venda_do_usuario(self.venda_repo, usuario_id, venda_id)
        self.venda_repo.deletar(venda.id)
        logger.info("Venda %s excluída pelo usuário %s.", venda.id, usuario_id)


# ====================================================================
# 2. CASOS DE USO DE CONSULTA
# ====================================================================

class ListarCategoriasUseCase:
    """Retorna as categorias disponíveis para novas vendas."""
    def __init__(self, categoria_repo: ICategoriaRepository):
        self.categoria_repo = categoria_repo

    def executar(self) -> List[Categoria]:
        return self.categoria_repo.listar_ativas()


class PainelVendasUseCase:
    """Últimas vendas do usuário e total vendido no mês corrente."""
    def __init__(self, venda_repo: IVendaRepository, relogio: Callable[[], datetime] = agora):
        self.venda_repo = venda_repo
        self.relogio = relogio

    def executar(self, usuario_id: int, limite: int = 10) -> PainelVendas:
        hoje = self.relogio()
        vendas_mes = self.venda_repo.listar_por_periodo(usuario_id, hoje.month, hoje.year)
        return PainelVendas(
            ultimas_vendas=self.venda_repo.listar_recentes(usuario_id, limite),
            total_mes=sum((venda.valor for venda in vendas_mes), Decimal("0.00")),
        )


class HistoricoVendasUseCase:
    """Histórico anual das vendas com filtro por emissão de Nota Fiscal."""
    def __init__(self, venda_repo: IVendaRepository, relogio: Callable[[], datetime] = agora):
        self.venda_repo = venda_repo
        self.relogio = relogio

    def executar(self, usuario_id: int, ano=None, filtro_nf: Optional[str] = "todas") -> HistoricoVendas:
        ano_corrente = self.relogio().year
        try:
            ano = int(ano) if ano not in (None, "") else ano_corrente
        except (TypeError, ValueError):
            ano = ano_corrente
        if not ANO_MINIMO <= ano <= ANO_MAXIMO:
            ano = ano_corrente

        filtro_nf = (filtro_nf or "todas").lower()
        if filtro_nf not in FILTROS_NF:
            filtro_nf = "todas"

        anos = self.venda_repo.listar_anos_com_vendas(usuario_id)
        if not anos:
            anos = [ano_corrente - 2, ano_corrente - 1, ano_corrente]

        vendas = self.venda_repo.listar_por_ano(usuario_id, ano, filtro_nf)
        historico = HistoricoVendas(ano=ano, filtro_nf=filtro_nf, anos=anos, vendas=vendas)

        for venda in vendas:
            historico.total_valor += venda.valor
            if venda.nota_emitida:
                historico.total_com_nf += 1
                historico.valor_com_nf += venda.valor
            else:
                historico.total_sem_nf += 1
                historico.valor_sem_nf += venda.valor
        historico.total_vendas = len(vendas)
        return historico


# ====================================================================
# 3. RELATÓRIO MENSAL
# ====================================================================

class GerarRelatorioMensalUseCase:
    """Caso de Uso que apura as vendas do mês e gera o PDF do relatório."""
    def __init__(self, venda_repo: IVendaRepository, relatorio_renderer: IRelatorioRenderer):
        self.venda_repo = venda_repo
        self.relatorio_renderer = relatorio_renderer

    def executar(self, usuario: Usuario, mes, ano) -> RelatorioGerado:
        mes, ano = validar_periodo(mes, ano)

        vendas = self.venda_repo.listar_por_periodo(usuario.id, mes, ano)
        if not vendas:
            raise DadosInvalidosError("Nenhuma venda encontrada para o período selecionado.")

        apuracao = apurar_receitas(vendas)
        conteudo = self.relatorio_renderer.renderizar(usuario, mes, ano, vendas, apuracao)
        logger.info(
            "Relatório %02d/%d gerado para o usuário %s (%d vendas, total=%s).",
            mes, ano, usuario.id, len(vendas), apuracao.total
        )
        return RelatorioGerado(nome_arquivo=f"relatorio_mei_{mes}_{ano}.pdf", conteudo=conteudo)


# ====================================================================
# 4. CASOS DE USO DE CONTA
# ====================================================================

class CadastrarUsuarioUseCase:
    """Cadastro de um novo MEI identificado pelo CPF."""
    def __init__(self, usuario_repo: IUsuarioRepository):
        self.usuario_repo = usuario_repo

    def executar(self, cpf, nome, senha, confirmar_senha, email=None, cnpj=None) -> Usuario:
        cpf = normalizar_cpf(cpf)
        if not nome or not nome.strip():
            raise DadosInvalidosError("Nome é obrigatório!")
        validar_nova_senha(senha, confirmar_senha)
        cnpj = normalizar_cnpj(cnpj)
        email = email.strip() if email and email.strip() else None

        if self.usuario_repo.buscar_por_cpf(cpf) is not None:
            raise CpfJaCadastradoError()
        if email and self.usuario_repo.buscar_por_email(email) is not None:
            raise EmailJaCadastradoError()

        usuario = self.usuario_repo.criar(
            Usuario(cpf=cpf, nome=nome.strip(), email=email, cnpj=cnpj), senha
        )
        logger.info("Usuário %s cadastrado.", usuario.id)
        return usuario


class AutenticarUsuarioUseCase:
    """Verifica CPF e senha. CPF inexistente e senha errada têm a mesma resposta."""
    def __init__(self, usuario_repo: IUsuarioRepository):
        self.usuario_repo = usuario_repo

    def executar(self, cpf, senha) -> Usuario:
        cpf = "".join(ch for ch in (cpf or "") if ch.isdigit())
        if not cpf or not senha:
            raise DadosInvalidosError("CPF e senha são obrigatórios")

        usuario = self.usuario_repo.buscar_por_cpf(cpf)
        if usuario is None or not self.usuario_repo.verificar_senha(usuario.id, senha):
            logger.warning("Tentativa de login inválida para o CPF final %s.", cpf[-2:])
            raise CredenciaisInvalidasError()
        return usuario


class AtualizarPerfilUseCase:
    """Atualiza nome, e-mail e CNPJ do usuário logado."""
    def __init__(self, usuario_repo: IUsuarioRepository):
        self.usuario_repo = usuario_repo

    def executar(self, usuario_id: int, nome, email, cnpj=None) -> Usuario:
        usuario = self.usuario_repo.buscar_por_id(usuario_id)
        if usuario is None:
            raise UsuarioNaoEncontradoError()
        if not nome or not nome.strip():
            raise DadosInvalidosError("Nome não pode estar vazio")
        if not email or not email.strip() or "@" not in email:
            raise DadosInvalidosError("Email inválido")

        email = email.strip()
        existente = self.usuario_repo.buscar_por_email(email)
        if existente is not None and existente.id != usuario_id:
            raise EmailJaCadastradoError()

        usuario.nome = nome.strip()
        usuario.email = email
        usuario.cnpj = normalizar_cnpj(cnpj)
        return self.usuario_repo.atualizar(usuario)


class AlterarSenhaUseCase:
    """Troca de senha exigindo a senha atual."""
    def __init__(self, usuario_repo: IUsuarioRepository):
        self.usuario_repo = usuario_repo

    def executar(self, usuario_id: int, senha_atual, nova_senha, confirmar_senha) -> None:
        if not senha_atual:
            raise DadosInvalidosError("Senha atual é obrigatória")
        if not self.usuario_repo.verificar_senha(usuario_id, senha_atual):
            raise DadosInvalidosError("Senha atual incorreta")
        validar_nova_senha(nova_senha, confirmar_senha)
        self.usuario_repo.definir_senha(usuario_id, nova_senha)
        logger.info("Senha alterada para o usuário %s.", usuario_id)
