# meivendas/core/testes.py

import unittest
from unittest.mock import Mock
from datetime import datetime, timezone
from decimal import Decimal

# Importamos as classes que queremos testar
from meivendas.core.use_cases import (
    RegistrarVendaUseCase,
    EditarVendaUseCase,
    ExcluirVendaUseCase,
    GerarRelatorioMensalUseCase,
    CadastrarUsuarioUseCase,
    AutenticarUsuarioUseCase,
    AtualizarPerfilUseCase,
    AlterarSenhaUseCase,
    PainelVendasUseCase,
    HistoricoVendasUseCase,
)
from meivendas.core.apuracao import apurar_receitas, classificar_categoria, REVENDA, INDUSTRIALIZADO, SERVICO
from meivendas.core.validadores import parse_valor_monetario, normalizar_flag_nf, validar_periodo
from meivendas.core.entities import Venda, Categoria, NotaFiscal, Usuario, ApuracaoMensal
from meivendas.core.exceptions import (
    DadosInvalidosError,
    CategoriaNaoEncontradaError,
    VendaNaoEncontradaError,
    AcessoNegadoError,
    CpfJaCadastradoError,
    EmailJaCadastradoError,
    CredenciaisInvalidasError,
    PersistenciaError,
)

INSTANTE_FIXO = datetime(2024, 3, 15, 14, 30, tzinfo=timezone.utc)

REVENDA_CAT = Categoria(id=1, nome='Revenda de Mercadorias')
INDUSTRIAL_CAT = Categoria(id=2, nome='Produtos Industrializados')
SERVICOS_CAT = Categoria(id=3, nome='Prestação de Serviços')
OUTROS_CAT = Categoria(id=4, nome='Outros')


def nova_venda(valor, categoria, flag='N', usuario_id=1, id=None):
    return Venda(
        id=id,
        valor=Decimal(valor),
        categoria=categoria,
        usuario_id=usuario_id,
        nota_fiscal_emitida=flag,
        data=INSTANTE_FIXO,
    )


# ====================================================================
# VALIDAÇÃO DOS CAMPOS
# ====================================================================

class TestParseValorMonetario(unittest.TestCase):

    def test_virgula_e_ponto_geram_o_mesmo_valor(self):
        """
        Cenário: "150,50" e "150.50" representam o mesmo valor.
        """
        self.assertEqual(parse_valor_monetario("150,50"), Decimal("150.50"))
        self.assertEqual(parse_valor_monetario("150,50"), parse_valor_monetario("150.50"))

    def test_separador_de_milhar(self):
        self.assertEqual(parse_valor_monetario("1.234,56"), Decimal("1234.56"))
        self.assertEqual(parse_valor_monetario("1,234.56"), Decimal("1234.56"))
        self.assertEqual(parse_valor_monetario("R$ 10"), Decimal("10.00"))

    def test_valores_invalidos(self):
        for valor in (None, "", "abc", "0", "0,00", "-5", "1,2,3", "1.2.3", "10,555", "1,2,3.45", "12.34.5,00", "1.23,45"):
            with self.subTest(valor=valor):
                with self.assertRaises(DadosInvalidosError):
                    parse_valor_monetario(valor)

    def test_limite_superior(self):
        self.assertEqual(parse_valor_monetario("9.999.999.999,99"), Decimal("9999999999.99"))
        for valor in ("10000000000", "99999999999999999999,99"):
            with self.subTest(valor=valor):
                with self.assertRaisesRegex(DadosInvalidosError, "Valor muito alto!"):
                    parse_valor_monetario(valor)

    def test_flag_nf(self):
        self.assertEqual(normalizar_flag_nf(None), 'N')
        self.assertEqual(normalizar_flag_nf('s'), 'S')
        with self.assertRaises(DadosInvalidosError):
            normalizar_flag_nf('X')

    def test_periodo(self):
        self.assertEqual(validar_periodo("3", "2024"), (3, 2024))
        for mes, ano in ((13, 2024), (0, 2024), (5, 1999), (5, 2101), ("x", 2024), (None, 2024)):
            with self.subTest(mes=mes, ano=ano):
                with self.assertRaises(DadosInvalidosError):
                    validar_periodo(mes, ano)


# ====================================================================
# APURAÇÃO MENSAL
# ====================================================================

class TestApuracaoMensal(unittest.TestCase):

    def test_lista_vazia_resulta_em_zeros(self):
        """
        Cenário: Sem vendas, todos os totais são zero.
        """
        apuracao = apurar_receitas([])

        self.assertEqual(apuracao.buckets, (Decimal("0.00"),) * 6)
        self.assertEqual(apuracao.total, Decimal("0.00"))
        self.assertEqual(apuracao.nao_classificadas, 0)

    def test_cenario_revenda_servicos_e_outros(self):
        """
        Cenário: Revenda 100,00 com NF, Serviços 50,00 sem NF e Outros 30,00.
        A categoria "Outros" fica fora da apuração.
        """
        # ARRANGE
        vendas = [
            nova_venda("100.00", REVENDA_CAT, 'S'),
            nova_venda("50.00", SERVICOS_CAT, 'N'),
            nova_venda("30.00", OUTROS_CAT, 'N'),
        ]

        # ACT
        apuracao = apurar_receitas(vendas)

        # ASSERT
        self.assertEqual(apuracao.buckets[0], Decimal("100.00"))
        self.assertEqual(apuracao.buckets[5], Decimal("50.00"))
        for indice in (1, 2, 3, 4):
            self.assertEqual(apuracao.buckets[indice], Decimal("0.00"))
        self.assertEqual(apuracao.total, Decimal("150.00"))
        self.assertEqual(apuracao.nao_classificadas, 1)

    def test_total_e_a_soma_dos_seis_totais(self):
        vendas = [
            nova_venda("0.10", REVENDA_CAT, 'S'),
            nova_venda("0.20", REVENDA_CAT, 'N'),
            nova_venda("19.99", INDUSTRIAL_CAT, 'S'),
            nova_venda("1234.56", INDUSTRIAL_CAT, 'N'),
            nova_venda("7.77", SERVICOS_CAT, 'S'),
            nova_venda("3.00", OUTROS_CAT, 'S'),
        ]

        apuracao = apurar_receitas(vendas)

        self.assertEqual(apuracao.total, sum(apuracao.buckets, Decimal("0")))
        self.assertEqual(apuracao.total, Decimal("1262.62"))
        self.assertEqual(apuracao.revenda_com_nf + apuracao.revenda_sem_nf, Decimal("0.30"))

    def test_nao_depende_da_ordem_e_nao_altera_as_vendas(self):
        vendas = [
            nova_venda("10.00", REVENDA_CAT, 'S'),
            nova_venda("20.00", SERVICOS_CAT, 'N'),
        ]

        primeira = apurar_receitas(vendas)
        segunda = apurar_receitas(list(reversed(vendas)))

        self.assertEqual(primeira, segunda)
        self.assertEqual(vendas[0].valor, Decimal("10.00"))
        self.assertEqual(vendas[1].nota_fiscal_emitida, 'N')

    def test_classificacao_por_nome(self):
        self.assertEqual(classificar_categoria('Venda de MERCADORIAS'), REVENDA)
        self.assertEqual(classificar_categoria('Produto próprio'), INDUSTRIALIZADO)
        self.assertEqual(classificar_categoria('Serviços'), SERVICO)
        self.assertIsNone(classificar_categoria('Outros'))
        self.assertIsNone(classificar_categoria(None))


# ====================================================================
# REGISTRO DE VENDA
# ====================================================================

class TestRegistrarVenda(unittest.TestCase):

    def setUp(self):
        """
        Prepara o ambiente com objetos "Mock" para simular
        as dependências externas (banco de dados).
        """
        self.venda_repo_mock = Mock()
        self.categoria_repo_mock = Mock()

        # O repositório devolve a própria venda recebida, com id preenchido
        def registrar(venda):
            venda.id = 10
            return venda
        self.venda_repo_mock.registrar.side_effect = registrar
        self.categoria_repo_mock.buscar_por_id.return_value = REVENDA_CAT

        self.use_case = RegistrarVendaUseCase(
            venda_repo=self.venda_repo_mock,
            categoria_repo=self.categoria_repo_mock,
            relogio=lambda: INSTANTE_FIXO,
        )

    def test_registrar_venda_sem_nota_fiscal(self):
        """
        Cenário: Venda com indicação 'N' não cria Nota Fiscal.
        """
        # ACT
        venda = self.use_case.executar(
            usuario_id=1, valor_bruto="150,50", nota_fiscal_emitida="N",
            categoria_id="1", descricao="  Bolo de pote  "
        )

        # ASSERT
        self.assertFalse(venda.nota_emitida)
        self.assertIsNone(venda.nota_fiscal)
        self.assertEqual(venda.valor, Decimal("150.50"))
        self.assertEqual(venda.descricao, "Bolo de pote")
        self.assertEqual(venda.data, INSTANTE_FIXO)
        self.venda_repo_mock.registrar.assert_called_once()

    def test_registrar_venda_com_nota_fiscal(self):
        """
        Cenário: Venda com indicação 'S' cria a Nota Fiscal com o mesmo valor da venda.
        """
        # ACT
        venda = self.use_case.executar(
            usuario_id=1, valor_bruto="1.234,56", nota_fiscal_emitida="s",
            categoria_id=1, descricao=None, numero_nota=" 000123 "
        )

        # ASSERT
        self.assertTrue(venda.nota_emitida)
        self.assertIsNotNone(venda.nota_fiscal)
        self.assertEqual(venda.nota_fiscal.valor, venda.valor)
        self.assertEqual(venda.nota_fiscal.numero, "000123")
        self.assertEqual(venda.nota_fiscal.usuario_id, 1)
        self.assertEqual(venda.nota_fiscal.data_emissao, INSTANTE_FIXO)
        self.assertEqual(venda.descricao, "")

    def test_nota_fiscal_sem_numero_nao_persiste_nada(self):
        """
        Cenário: Indicação 'S' sem número da nota é rejeitada antes de gravar.
        """
        with self.assertRaises(DadosInvalidosError):
            self.use_case.executar(
                usuario_id=1, valor_bruto="100", nota_fiscal_emitida="S",
                categoria_id=1, descricao="", numero_nota="   "
            )

        self.venda_repo_mock.registrar.assert_not_called()

    def test_categoria_inexistente(self):
        # ARRANGE
        self.categoria_repo_mock.buscar_por_id.return_value = None

        # ACT e ASSERT
        with self.assertRaises(CategoriaNaoEncontradaError):
            self.use_case.executar(
                usuario_id=1, valor_bruto="100", nota_fiscal_emitida="N",
                categoria_id=99, descricao=""
            )
        self.venda_repo_mock.registrar.assert_not_called()

    def test_valor_invalido_nao_consulta_repositorios(self):
        with self.assertRaises(DadosInvalidosError):
            self.use_case.executar(
                usuario_id=1, valor_bruto="abc", nota_fiscal_emitida="N",
                categoria_id=1, descricao=""
            )
        self.venda_repo_mock.registrar.assert_not_called()

    def test_falha_de_persistencia_propaga(self):
        """
        Cenário: O erro de persistência chega sem alteração a quem chamou.
        """
        self.venda_repo_mock.registrar.side_effect = PersistenciaError()

        with self.assertRaises(PersistenciaError):
            self.use_case.executar(
                usuario_id=1, valor_bruto="100", nota_fiscal_emitida="S",
                categoria_id=1, descricao="", numero_nota="55"
            )


# ====================================================================
# EDIÇÃO E EXCLUSÃO DE VENDA
# ====================================================================

class TestEditarVenda(unittest.TestCase):

    def setUp(self):
        self.venda_repo_mock = Mock()
        self.categoria_repo_mock = Mock()
        self.venda_repo_mock.atualizar.side_effect = lambda venda: venda
        self.categoria_repo_mock.buscar_por_id.return_value = SERVICOS_CAT

        self.use_case = EditarVendaUseCase(
            venda_repo=self.venda_repo_mock,
            categoria_repo=self.categoria_repo_mock,
            relogio=lambda: INSTANTE_FIXO,
        )

    def test_passa_a_ter_nota_fiscal(self):
        # ARRANGE
        self.venda_repo_mock.buscar_por_id.return_value = nova_venda("10.00", REVENDA_CAT, 'N', id=5)

        # ACT
        venda = self.use_case.executar(
            usuario_id=1, venda_id=5, valor_bruto="20,00", nota_fiscal_emitida="S",
            categoria_id=3, descricao="Conserto", numero_nota="77"
        )

        # ASSERT
        self.assertEqual(venda.valor, Decimal("20.00"))
        self.assertEqual(venda.categoria, SERVICOS_CAT)
        self.assertEqual(venda.nota_fiscal.valor, Decimal("20.00"))
        self.assertEqual(venda.nota_fiscal.venda_id, 5)
        self.assertEqual(venda.data, INSTANTE_FIXO)

    def test_atualiza_nota_existente_e_desvincula(self):
        venda_original = nova_venda("10.00", REVENDA_CAT, 'S', id=5)
        venda_original.nota_fiscal = NotaFiscal(id=9, numero="1", valor=Decimal("10.00"), usuario_id=1, venda_id=5)
        self.venda_repo_mock.buscar_por_id.return_value = venda_original

        venda = self.use_case.executar(
            usuario_id=1, venda_id=5, valor_bruto="12.5", nota_fiscal_emitida="S",
            categoria_id=3, descricao="", numero_nota="2"
        )
        self.assertEqual(venda.nota_fiscal.id, 9)
        self.assertEqual(venda.nota_fiscal.numero, "2")
        self.assertEqual(venda.nota_fiscal.valor, Decimal("12.50"))

        venda = self.use_case.executar(
            usuario_id=1, venda_id=5, valor_bruto="12.5", nota_fiscal_emitida="N",
            categoria_id=3, descricao=""
        )
        self.assertIsNone(venda.nota_fiscal)
        self.assertFalse(venda.nota_emitida)

    def test_venda_de_outro_usuario(self):
        self.venda_repo_mock.buscar_por_id.return_value = nova_venda("10.00", REVENDA_CAT, usuario_id=2, id=5)

        with self.assertRaises(AcessoNegadoError):
            self.use_case.executar(
                usuario_id=1, venda_id=5, valor_bruto="20", nota_fiscal_emitida="N",
                categoria_id=3, descricao=""
            )
        self.venda_repo_mock.atualizar.assert_not_called()


class TestExcluirVenda(unittest.TestCase):

    def setUp(self):
        self.venda_repo_mock = Mock()
        self.use_case = ExcluirVendaUseCase(venda_repo=self.venda_repo_mock)

    def test_excluir_venda_propria(self):
        # ARRANGE
        self.venda_repo_mock.buscar_por_id.return_value = nova_venda("10.00", REVENDA_CAT, id=7)

        # ACT
        self.use_case.executar(usuario_id=1, venda_id="7")

        # ASSERT
        self.venda_repo_mock.buscar_por_id.assert_called_once_with(7)
        self.venda_repo_mock.deletar.assert_called_once_with(7)

    def test_venda_alheia_e_venda_inexistente_tem_a_mesma_mensagem(self):
        """
        Cenário: Excluir venda de outro usuário não revela que ela existe.
        """
        # Venda de outro usuário
        self.venda_repo_mock.buscar_por_id.return_value = nova_venda("10.00", REVENDA_CAT, usuario_id=2, id=7)
        with self.assertRaises(AcessoNegadoError) as negado:
            self.use_case.executar(usuario_id=1, venda_id=7)

        # Venda inexistente
        self.venda_repo_mock.buscar_por_id.return_value = None
        with self.assertRaises(VendaNaoEncontradaError) as inexistente:
            self.use_case.executar(usuario_id=1, venda_id=8)

        self.assertEqual(negado.exception.message, inexistente.exception.message)
        self.assertEqual(str(negado.exception), str(inexistente.exception))
        self.venda_repo_mock.deletar.assert_not_called()

    def test_id_invalido(self):
        with self.assertRaises(VendaNaoEncontradaError):
            self.use_case.executar(usuario_id=1, venda_id="abc")
        self.venda_repo_mock.buscar_por_id.assert_not_called()


# ====================================================================
# RELATÓRIO, PAINEL E HISTÓRICO
# ====================================================================

class TestGerarRelatorioMensal(unittest.TestCase):

    def setUp(self):
        self.venda_repo_mock = Mock()
        self.renderer_mock = Mock()
        self.renderer_mock.renderizar.return_value = b"%PDF-1.4 conteudo"
        self.usuario = Usuario(id=1, cpf="12345678901", nome="Maria")
        self.use_case = GerarRelatorioMensalUseCase(
            venda_repo=self.venda_repo_mock,
            relatorio_renderer=self.renderer_mock,
        )

    def test_gera_relatorio_com_apuracao(self):
        # ARRANGE
        vendas = [nova_venda("100.00", REVENDA_CAT, 'S'), nova_venda("50.00", SERVICOS_CAT, 'N')]
        self.venda_repo_mock.listar_por_periodo.return_value = vendas

        # ACT
        relatorio = self.use_case.executar(self.usuario, "3", "2024")

        # ASSERT
        self.venda_repo_mock.listar_por_periodo.assert_called_once_with(1, 3, 2024)
        args = self.renderer_mock.renderizar.call_args.args
        self.assertEqual(args[:4], (self.usuario, 3, 2024, vendas))
        self.assertIsInstance(args[4], ApuracaoMensal)
        self.assertEqual(args[4].total, Decimal("150.00"))
        self.assertEqual(relatorio.nome_arquivo, "relatorio_mei_3_2024.pdf")
        self.assertTrue(relatorio.conteudo.startswith(b"%PDF"))

    def test_periodo_sem_vendas(self):
        self.venda_repo_mock.listar_por_periodo.return_value = []

        with self.assertRaises(DadosInvalidosError) as erro:
            self.use_case.executar(self.usuario, 3, 2024)

        self.assertEqual(erro.exception.message, "Nenhuma venda encontrada para o período selecionado.")
        self.renderer_mock.renderizar.assert_not_called()

    def test_mes_invalido(self):
        with self.assertRaises(DadosInvalidosError):
            self.use_case.executar(self.usuario, 13, 2024)
        self.venda_repo_mock.listar_por_periodo.assert_not_called()


class TestPainelEHistorico(unittest.TestCase):

    def setUp(self):
        self.venda_repo_mock = Mock()

    def test_painel_soma_o_mes_corrente(self):
        self.venda_repo_mock.listar_por_periodo.return_value = [
            nova_venda("10.10", REVENDA_CAT), nova_venda("5.00", SERVICOS_CAT)
        ]
        self.venda_repo_mock.listar_recentes.return_value = []
        use_case = PainelVendasUseCase(self.venda_repo_mock, relogio=lambda: INSTANTE_FIXO)

        painel = use_case.executar(usuario_id=1)

        self.assertEqual(painel.total_mes, Decimal("15.10"))
        self.venda_repo_mock.listar_por_periodo.assert_called_once_with(1, 3, 2024)
        self.venda_repo_mock.listar_recentes.assert_called_once_with(1, 10)

    def test_historico_totaliza_por_nota_fiscal(self):
        self.venda_repo_mock.listar_anos_com_vendas.return_value = [2024, 2023]
        self.venda_repo_mock.listar_por_ano.return_value = [
            nova_venda("100.00", REVENDA_CAT, 'S'),
            nova_venda("40.00", SERVICOS_CAT, 'N'),
            nova_venda("60.00", OUTROS_CAT, 'N'),
        ]
        use_case = HistoricoVendasUseCase(self.venda_repo_mock, relogio=lambda: INSTANTE_FIXO)

        historico = use_case.executar(usuario_id=1, ano="2023", filtro_nf="COM")

        self.venda_repo_mock.listar_por_ano.assert_called_once_with(1, 2023, "com")
        self.assertEqual(historico.anos, [2024, 2023])
        self.assertEqual(historico.total_vendas, 3)
        self.assertEqual(historico.total_valor, Decimal("200.00"))
        self.assertEqual(historico.total_com_nf, 1)
        self.assertEqual(historico.total_sem_nf, 2)
        self.assertEqual(historico.valor_sem_nf, Decimal("100.00"))

    def test_historico_sem_vendas_usa_ultimos_tres_anos(self):
        self.venda_repo_mock.listar_anos_com_vendas.return_value = []
        self.venda_repo_mock.listar_por_ano.return_value = []
        use_case = HistoricoVendasUseCase(self.venda_repo_mock, relogio=lambda: INSTANTE_FIXO)

        historico = use_case.executar(usuario_id=1, ano=None, filtro_nf="qualquer")

        self.assertEqual(historico.ano, 2024)
        self.assertEqual(historico.filtro_nf, "todas")
        self.assertEqual(historico.anos, [2022, 2023, 2024])
        self.assertEqual(historico.total_valor, Decimal("0.00"))

    def test_historico_com_ano_fora_do_intervalo_usa_ano_corrente(self):
        """
        Cenário: Ano absurdo na consulta cai no ano corrente em vez de chegar ao banco.
        """
        # ARRANGE
        self.venda_repo_mock.listar_anos_com_vendas.return_value = [2024]
        self.venda_repo_mock.listar_por_ano.return_value = []
        use_case = HistoricoVendasUseCase(self.venda_repo_mock, relogio=lambda: INSTANTE_FIXO)

        # ACT
        historico = use_case.executar(usuario_id=1, ano="99999")

        # ASSERT
        self.assertEqual(historico.ano, 2024)
        self.venda_repo_mock.listar_por_ano.assert_called_once_with(1, 2024, "todas")


# ====================================================================
# CONTA DO USUÁRIO
# ====================================================================

class TestContaUsuario(unittest.TestCase):

    def setUp(self):
        self.usuario_repo_mock = Mock()
        self.usuario = Usuario(id=1, cpf="12345678901", nome="Maria", email="maria@exemplo.com")

    def test_cadastro_normaliza_cpf(self):
        # ARRANGE
        self.usuario_repo_mock.buscar_por_cpf.return_value = None
        self.usuario_repo_mock.buscar_por_email.return_value = None
        self.usuario_repo_mock.criar.side_effect = lambda usuario, senha: usuario
        use_case = CadastrarUsuarioUseCase(self.usuario_repo_mock)

        # ACT
        usuario = use_case.executar(
            cpf="123.456.789-01", nome=" Maria ", senha="segredo", confirmar_senha="segredo",
            email="", cnpj="12.345.678/0001-90"
        )

        # ASSERT
        self.assertEqual(usuario.cpf, "12345678901")
        self.assertEqual(usuario.nome, "Maria")
        self.assertIsNone(usuario.email)
        self.assertEqual(usuario.cnpj, "12345678000190")
        self.usuario_repo_mock.criar.assert_called_once_with(usuario, "segredo")
        self.usuario_repo_mock.buscar_por_email.assert_not_called()

    def test_cadastro_rejeita_duplicados_e_senhas(self):
        use_case = CadastrarUsuarioUseCase(self.usuario_repo_mock)

        self.usuario_repo_mock.buscar_por_cpf.return_value = self.usuario
        with self.assertRaises(CpfJaCadastradoError):
            use_case.executar("12345678901", "Maria", "segredo", "segredo")

        self.usuario_repo_mock.buscar_por_cpf.return_value = None
        self.usuario_repo_mock.buscar_por_email.return_value = self.usuario
        with self.assertRaises(EmailJaCadastradoError):
            use_case.executar("12345678901", "Maria", "segredo", "segredo", email="maria@exemplo.com")

        for senha, confirmacao in (("123", "123"), ("segredo", "outra12"), ("", "")):
            with self.subTest(senha=senha):
                with self.assertRaises(DadosInvalidosError):
                    use_case.executar("12345678901", "Maria", senha, confirmacao)

        self.usuario_repo_mock.criar.assert_not_called()

    def test_login_com_cpf_ou_senha_errados_tem_a_mesma_resposta(self):
        use_case = AutenticarUsuarioUseCase(self.usuario_repo_mock)

        self.usuario_repo_mock.buscar_por_cpf.return_value = None
        with self.assertRaises(CredenciaisInvalidasError) as cpf_errado:
            use_case.executar("000.000.000-00", "segredo")

        self.usuario_repo_mock.buscar_por_cpf.return_value = self.usuario
        self.usuario_repo_mock.verificar_senha.return_value = False
        with self.assertRaises(CredenciaisInvalidasError) as senha_errada:
            use_case.executar("123.456.789-01", "errada")

        self.assertEqual(cpf_errado.exception.message, senha_errada.exception.message)

        self.usuario_repo_mock.verificar_senha.return_value = True
        self.assertEqual(use_case.executar("123.456.789-01", "segredo"), self.usuario)
        self.usuario_repo_mock.buscar_por_cpf.assert_called_with("12345678901")

    def test_atualizar_perfil(self):
        self.usuario_repo_mock.buscar_por_id.return_value = self.usuario
        self.usuario_repo_mock.buscar_por_email.return_value = self.usuario
        self.usuario_repo_mock.atualizar.side_effect = lambda usuario: usuario
        use_case = AtualizarPerfilUseCase(self.usuario_repo_mock)

        usuario = use_case.executar(1, nome="Maria Silva", email="maria@exemplo.com", cnpj="")

        self.assertEqual(usuario.nome, "Maria Silva")
        self.assertIsNone(usuario.cnpj)

        with self.assertRaises(DadosInvalidosError):
            use_case.executar(1, nome="Maria", email="sem-arroba")

    def test_alterar_senha_exige_senha_atual(self):
        use_case = AlterarSenhaUseCase(self.usuario_repo_mock)

        self.usuario_repo_mock.verificar_senha.return_value = False
        with self.assertRaises(DadosInvalidosError):
            use_case.executar(1, "errada", "novasenha", "novasenha")
        self.usuario_repo_mock.definir_senha.assert_not_called()

        self.usuario_repo_mock.verificar_senha.return_value = True
        use_case.executar(1, "atual", "novasenha", "novasenha")
        self.usuario_repo_mock.definir_senha.assert_called_once_with(1, "novasenha")


if __name__ == '__main__':
    unittest.main()
