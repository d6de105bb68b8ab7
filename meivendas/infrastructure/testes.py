from datetime import datetime
from decimal import Decimal
from unittest.mock import patch
from zoneinfo import ZoneInfo

from django.core.management import call_command
from django.db import DatabaseError
from django.test import TestCase

# Importamos as classes que queremos testar
from meivendas.infrastructure.models import (
    Usuario as UsuarioModel,
    Categoria as CategoriaModel,
    NotaFiscal as NotaFiscalModel,
    Venda as VendaModel,
)
from meivendas.infrastructure.repositories import (
    VendaRepositoryDjango,
    CategoriaRepositoryDjango,
    UsuarioRepositoryDjango,
)
from meivendas.infrastructure.gateways import RelatorioPDFReportLab, formatar_moeda
from meivendas.core.apuracao import apurar_receitas
from meivendas.core.entities import Venda, Categoria, NotaFiscal, Usuario
from meivendas.core.exceptions import PersistenciaError

SAO_PAULO = ZoneInfo('America/Sao_Paulo')


class VendaRepositoryTestCase(TestCase):

    def setUp(self):
        """
        Cria o repositório e os registros básicos (usuário e categorias) no banco de teste.
        """
        self.repository = VendaRepositoryDjango()
        self.usuario = UsuarioModel.objects.create_user(cpf='12345678901', password='segredo', nome='Maria')
        self.outro_usuario = UsuarioModel.objects.create_user(cpf='10987654321', password='segredo', nome='João')
        self.revenda = CategoriaModel.objects.create(nome='Revenda de Mercadorias')
        self.servicos = CategoriaModel.objects.create(nome='Prestação de Serviços')

    def _venda(self, valor, categoria, flag='N', numero_nota=None, data=None):
        venda = Venda(
            valor=Decimal(valor),
            categoria=Categoria(id=categoria.id, nome=categoria.nome),
            usuario_id=self.usuario.id,
            nota_fiscal_emitida=flag,
            descricao='Teste',
        )
        if data is not None:
            venda.data = data
        if flag == 'S':
            venda.nota_fiscal = NotaFiscal(numero=numero_nota, valor=venda.valor, usuario_id=self.usuario.id)
        return venda

    def test_registrar_venda_com_nota_fiscal(self):
        """
        Cenário: A nota fiscal é gravada e vinculada à venda.
        """
        # ACT
        venda = self.repository.registrar(self._venda('150.50', self.revenda, 'S', '123'))

        # ASSERT
        self.assertIsNotNone(venda.id)
        self.assertIsNotNone(venda.nota_fiscal.id)
        self.assertEqual(venda.nota_fiscal.venda_id, venda.id)
        model = VendaModel.objects.get(pk=venda.id)
        self.assertEqual(model.nota_fiscal.numero, '123')
        self.assertEqual(model.nota_fiscal.valor, model.valor)

    def test_registrar_venda_sem_nota_fiscal(self):
        venda = self.repository.registrar(self._venda('10.00', self.servicos))

        self.assertIsNone(venda.nota_fiscal)
        self.assertFalse(venda.nota_emitida)
        self.assertEqual(NotaFiscalModel.objects.count(), 0)

    def test_falha_na_venda_desfaz_a_nota_fiscal(self):
        """
        Cenário: Se a gravação da venda falhar, a nota fiscal também não é gravada.
        """
        venda = self._venda('10.00', self.revenda, 'S', '999')

        with patch.object(VendaModel, 'save', side_effect=DatabaseError('conexão perdida')):
            with self.assertRaises(PersistenciaError):
                self.repository.registrar(venda)

        self.assertEqual(NotaFiscalModel.objects.count(), 0)
        self.assertEqual(VendaModel.objects.count(), 0)

    def test_buscar_e_deletar_mantem_a_nota(self):
        venda = self.repository.registrar(self._venda('20.00', self.revenda, 'S', '1'))

        self.assertEqual(self.repository.buscar_por_id(venda.id).valor, Decimal('20.00'))
        self.repository.deletar(venda.id)

        self.assertIsNone(self.repository.buscar_por_id(venda.id))
        self.assertEqual(NotaFiscalModel.objects.count(), 1)

    def test_atualizar_desvincula_nota(self):
        venda = self.repository.registrar(self._venda('20.00', self.revenda, 'S', '1'))

        venda.nota_fiscal_emitida = 'N'
        venda.nota_fiscal = None
        venda.valor = Decimal('25.00')
        atualizada = self.repository.atualizar(venda)

        self.assertIsNone(atualizada.nota_fiscal)
        self.assertEqual(atualizada.valor, Decimal('25.00'))
        self.assertEqual(NotaFiscalModel.objects.count(), 1)

    def test_listar_por_periodo_usa_o_fuso_local(self):
        """
        Cenário: 01/04 às 01h em UTC ainda é março em São Paulo.
        """
        self.repository.registrar(self._venda('10.00', self.revenda, data=datetime(2024, 3, 31, 22, 0, tzinfo=SAO_PAULO)))
        self.repository.registrar(self._venda('20.00', self.revenda, data=datetime(2024, 4, 2, 10, 0, tzinfo=SAO_PAULO)))
        VendaModel.objects.create(
            usuario=self.outro_usuario, categoria=self.revenda, valor=Decimal('99.00'),
            data=datetime(2024, 3, 10, 10, 0, tzinfo=SAO_PAULO)
        )

        marco = self.repository.listar_por_periodo(self.usuario.id, 3, 2024)
        abril = self.repository.listar_por_periodo(self.usuario.id, 4, 2024)

        self.assertEqual([v.valor for v in marco], [Decimal('10.00')])
        self.assertEqual([v.valor for v in abril], [Decimal('20.00')])

    def test_listar_por_ano_e_anos_com_vendas(self):
        self.repository.registrar(self._venda('10.00', self.revenda, 'S', '1', data=datetime(2023, 5, 1, 12, tzinfo=SAO_PAULO)))
        self.repository.registrar(self._venda('20.00', self.revenda, data=datetime(2024, 5, 1, 12, tzinfo=SAO_PAULO)))
        self.repository.registrar(self._venda('30.00', self.servicos, 'S', '2', data=datetime(2024, 6, 1, 12, tzinfo=SAO_PAULO)))

        self.assertEqual(self.repository.listar_anos_com_vendas(self.usuario.id), [2024, 2023])
        self.assertEqual(len(self.repository.listar_por_ano(self.usuario.id, 2024)), 2)
        com_nf = self.repository.listar_por_ano(self.usuario.id, 2024, 'com')
        self.assertEqual([v.valor for v in com_nf], [Decimal('30.00')])
        sem_nf = self.repository.listar_por_ano(self.usuario.id, 2024, 'sem')
        self.assertEqual([v.valor for v in sem_nf], [Decimal('20.00')])
        self.assertEqual(self.repository.listar_recentes(self.usuario.id, 2)[0].valor, Decimal('30.00'))


class CategoriaEUsuarioRepositoryTestCase(TestCase):

    def test_listar_apenas_categorias_ativas(self):
        CategoriaModel.objects.create(nome='Revenda de Mercadorias')
        CategoriaModel.objects.create(nome='Antiga', ativo=False)

        categorias = CategoriaRepositoryDjango().listar_ativas()

        self.assertEqual([c.nome for c in categorias], ['Revenda de Mercadorias'])
        self.assertIsNone(CategoriaRepositoryDjango().buscar_por_id(999))

    def test_criar_usuario_guarda_hash_da_senha(self):
        repository = UsuarioRepositoryDjango()

        usuario = repository.criar(Usuario(cpf='12345678901', nome='Maria', email='maria@exemplo.com'), 'segredo')

        model = UsuarioModel.objects.get(pk=usuario.id)
        self.assertNotEqual(model.password, 'segredo')
        self.assertTrue(repository.verificar_senha(usuario.id, 'segredo'))
        self.assertFalse(repository.verificar_senha(usuario.id, 'errada'))
        self.assertEqual(repository.buscar_por_cpf('12345678901').nome, 'Maria')
        self.assertEqual(repository.buscar_por_email('MARIA@exemplo.com').id, usuario.id)

        repository.definir_senha(usuario.id, 'novasenha')
        self.assertTrue(repository.verificar_senha(usuario.id, 'novasenha'))

    def test_cpf_duplicado_vira_erro_de_persistencia(self):
        repository = UsuarioRepositoryDjango()
        repository.criar(Usuario(cpf='12345678901', nome='Maria'), 'segredo')

        with self.assertRaises(PersistenciaError):
            repository.criar(Usuario(cpf='12345678901', nome='Outra'), 'segredo')

    def test_comando_carregar_categorias(self):
        call_command('carregar_categorias', verbosity=0)
        call_command('carregar_categorias', verbosity=0)

        self.assertEqual(CategoriaModel.objects.count(), 3)


class RelatorioPDFTestCase(TestCase):

    def test_renderizar_gera_pdf(self):
        usuario = Usuario(id=1, cpf='12345678901', nome='Maria <MEI>')
        vendas = [
            Venda(valor=Decimal('100.00'), categoria=Categoria(nome='Revenda de Mercadorias'),
                  usuario_id=1, nota_fiscal_emitida='S', descricao='Bolo & café'),
            Venda(valor=Decimal('50.00'), categoria=Categoria(nome='Prestação de Serviços'),
                  usuario_id=1),
        ]

        conteudo = RelatorioPDFReportLab().renderizar(usuario, 3, 2024, vendas, apurar_receitas(vendas))

        self.assertTrue(conteudo.startswith(b'%PDF'))

    def test_formatar_moeda(self):
        self.assertEqual(formatar_moeda(Decimal('1234.56')), 'R$ 1.234,56')
        self.assertEqual(formatar_moeda(Decimal('0')), 'R$ 0,00')
