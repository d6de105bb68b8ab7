from decimal import Decimal
from unittest.mock import patch

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from meivendas.core.exceptions import PersistenciaError
from meivendas.infrastructure.models import (
    Usuario as UsuarioModel,
    Categoria as CategoriaModel,
    NotaFiscal as NotaFiscalModel,
    Venda as VendaModel,
)


class APITestCaseBase(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.usuario = UsuarioModel.objects.create_user(cpf='12345678901', password='segredo', nome='Maria')
        self.outro_usuario = UsuarioModel.objects.create_user(cpf='10987654321', password='segredo', nome='João')
        self.revenda = CategoriaModel.objects.create(nome='Revenda de Mercadorias')
        self.servicos = CategoriaModel.objects.create(nome='Prestação de Serviços')
        self.client.force_authenticate(user=self.usuario)


# ====================================================================
# AUTENTICAÇÃO
# ====================================================================

class AutenticacaoAPITestCase(TestCase):

    def setUp(self):
        self.client = APIClient()

    def test_cadastro_e_login_por_cpf(self):
        # ACT: cadastro
        resposta = self.client.post(reverse('cadastro'), {
            'cpf': '123.456.789-01', 'nome': 'Maria', 'senha': 'segredo',
            'confirmar_senha': 'segredo', 'email': 'maria@exemplo.com',
        }, format='json')

        # ASSERT
        self.assertEqual(resposta.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resposta.data['usuario']['cpf'], '12345678901')

        # ACT: login com o CPF formatado
        resposta = self.client.post(reverse('login'), {'cpf': '123.456.789-01', 'senha': 'segredo'}, format='json')
        self.assertEqual(resposta.status_code, status.HTTP_200_OK)

        # A sessão dá acesso às rotas protegidas
        self.assertEqual(self.client.get(reverse('perfil')).status_code, status.HTTP_200_OK)

        self.client.post(reverse('logout'))
        self.assertIn(
            self.client.get(reverse('perfil')).status_code,
            (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)
        )

    def test_login_invalido_tem_mensagem_unica(self):
        UsuarioModel.objects.create_user(cpf='12345678901', password='segredo', nome='Maria')

        cpf_errado = self.client.post(reverse('login'), {'cpf': '00000000000', 'senha': 'segredo'}, format='json')
        senha_errada = self.client.post(reverse('login'), {'cpf': '12345678901', 'senha': 'errada'}, format='json')

        self.assertEqual(cpf_errado.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(cpf_errado.data, senha_errada.data)
        self.assertEqual(cpf_errado.data['message'], 'CPF ou senha incorretos.')

    def test_cadastro_com_cpf_repetido(self):
        UsuarioModel.objects.create_user(cpf='12345678901', password='segredo', nome='Maria')

        resposta = self.client.post(reverse('cadastro'), {
            'cpf': '12345678901', 'nome': 'Outra', 'senha': 'segredo', 'confirmar_senha': 'segredo',
        }, format='json')

        self.assertEqual(resposta.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resposta.data['message'], 'CPF já cadastrado no sistema!')

    def test_token_jwt_por_cpf(self):
        UsuarioModel.objects.create_user(cpf='12345678901', password='segredo', nome='Maria')

        resposta = self.client.post(reverse('token_obtain_pair'), {'cpf': '12345678901', 'password': 'segredo'}, format='json')
        self.assertEqual(resposta.status_code, status.HTTP_200_OK)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {resposta.data['access']}")
        self.assertEqual(self.client.get(reverse('painel')).status_code, status.HTTP_200_OK)

    def test_rotas_protegidas_exigem_login(self):
        resposta = self.client.get(reverse('vendas'))
        self.assertEqual(resposta.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertIn('message', resposta.data)


# ====================================================================
# VENDAS
# ====================================================================

class VendasAPITestCase(APITestCaseBase):

    def test_registrar_venda_com_nota_fiscal(self):
        """
        Cenário: Venda com NF grava a nota com o mesmo valor.
        """
        # ACT
        resposta = self.client.post(reverse('vendas'), {
            'valor': '1.234,56', 'nota_fiscal_emitida': 'S', 'categoria_id': self.revenda.id,
            'descricao': 'Lote de peças', 'numero_nota': '555',
        }, format='json')

        # ASSERT
        self.assertEqual(resposta.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resposta.data['venda']['valor'], '1234.56')
        self.assertTrue(resposta.data['venda']['nota_emitida'])
        venda = VendaModel.objects.get()
        self.assertEqual(venda.usuario, self.usuario)
        self.assertEqual(venda.nota_fiscal.valor, Decimal('1234.56'))

    def test_registrar_venda_sem_numero_da_nota(self):
        resposta = self.client.post(reverse('vendas'), {
            'valor': '100', 'nota_fiscal_emitida': 'S', 'categoria_id': self.revenda.id,
        }, format='json')

        self.assertEqual(resposta.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resposta.data['message'], 'Número da Nota Fiscal é obrigatório!')
        self.assertEqual(VendaModel.objects.count(), 0)
        self.assertEqual(NotaFiscalModel.objects.count(), 0)

    def test_registrar_venda_com_valor_acima_do_limite(self):
        """
        Cenário: Valor maior que a coluna suporta é recusado antes de gravar venda ou nota.
        """
        resposta = self.client.post(reverse('vendas'), {
            'valor': '99999999999999999999,99', 'nota_fiscal_emitida': 'S',
            'categoria_id': self.revenda.id, 'numero_nota': '777',
        }, format='json')

        self.assertEqual(resposta.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resposta.data['message'], 'Valor muito alto!')
        self.assertEqual(VendaModel.objects.count(), 0)
        self.assertEqual(NotaFiscalModel.objects.count(), 0)

    def test_campos_ausentes(self):
        resposta = self.client.post(reverse('vendas'), {'valor': '10'}, format='json')

        self.assertEqual(resposta.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('categoria_id', resposta.data['errors'])

    def test_excluir_venda_alheia_igual_a_inexistente(self):
        """
        Cenário: Excluir venda de outro usuário responde igual a uma venda inexistente.
        """
        alheia = VendaModel.objects.create(usuario=self.outro_usuario, categoria=self.revenda, valor=Decimal('10.00'))

        resposta_alheia = self.client.delete(reverse('venda_detalhe', args=[alheia.id]))
        resposta_inexistente = self.client.delete(reverse('venda_detalhe', args=[alheia.id + 1000]))

        self.assertEqual(resposta_alheia.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resposta_alheia.status_code, resposta_inexistente.status_code)
        self.assertEqual(resposta_alheia.data, resposta_inexistente.data)
        self.assertTrue(VendaModel.objects.filter(pk=alheia.id).exists())

    def test_excluir_venda_propria(self):
        venda = VendaModel.objects.create(usuario=self.usuario, categoria=self.revenda, valor=Decimal('10.00'))

        resposta = self.client.delete(reverse('venda_detalhe', args=[venda.id]))

        self.assertEqual(resposta.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(VendaModel.objects.filter(pk=venda.id).exists())

    def test_editar_venda(self):
        venda = VendaModel.objects.create(usuario=self.usuario, categoria=self.revenda, valor=Decimal('10.00'))

        resposta = self.client.put(reverse('venda_detalhe', args=[venda.id]), {
            'valor': '15,00', 'nota_fiscal_emitida': 'N', 'categoria_id': self.servicos.id, 'descricao': 'Ajuste',
        }, format='json')

        self.assertEqual(resposta.status_code, status.HTTP_200_OK)
        venda.refresh_from_db()
        self.assertEqual(venda.valor, Decimal('15.00'))
        self.assertEqual(venda.categoria, self.servicos)

    def test_historico_e_painel(self):
        VendaModel.objects.create(usuario=self.usuario, categoria=self.revenda, valor=Decimal('10.00'), nota_fiscal_emitida='N')
        VendaModel.objects.create(usuario=self.outro_usuario, categoria=self.revenda, valor=Decimal('99.00'))

        historico = self.client.get(reverse('vendas'), {'filtro_nf': 'sem'})
        painel = self.client.get(reverse('painel'))

        self.assertEqual(historico.status_code, status.HTTP_200_OK)
        self.assertEqual(historico.data['ano'], timezone.localtime().year)
        self.assertEqual(historico.data['total_vendas'], 1)
        self.assertEqual(painel.data['total_mes'], '10.00')
        self.assertEqual(len(painel.data['ultimas_vendas']), 1)

    def test_historico_com_ano_fora_do_intervalo(self):
        resposta = self.client.get(reverse('vendas'), {'ano': '99999'})

        self.assertEqual(resposta.status_code, status.HTTP_200_OK)
        self.assertEqual(resposta.data['ano'], timezone.localtime().year)

    def test_categorias(self):
        resposta = self.client.get(reverse('categorias'))

        self.assertEqual([c['nome'] for c in resposta.data], ['Prestação de Serviços', 'Revenda de Mercadorias'])

    def test_falha_de_persistencia_retorna_503(self):
        with patch(
            'meivendas.infrastructure.repositories.VendaRepositoryDjango.registrar',
            side_effect=PersistenciaError(),
        ), patch('meivendas.presentation.exception_handler.logger') as logger_mock:
            resposta = self.client.post(reverse('vendas'), {
                'valor': '10', 'nota_fiscal_emitida': 'N', 'categoria_id': self.revenda.id,
            }, format='json')

        self.assertEqual(resposta.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(resposta.data['message'], 'Não foi possível concluir a operação. Tente novamente.')
        # o erro com traceback é registrado uma única vez, pelo repositório
        logger_mock.error.assert_not_called()
        logger_mock.warning.assert_called_once()


# ====================================================================
# RELATÓRIO E PERFIL
# ====================================================================

class RelatorioAPITestCase(APITestCaseBase):

    def test_download_do_relatorio(self):
        agora = timezone.localtime()
        VendaModel.objects.create(usuario=self.usuario, categoria=self.revenda, valor=Decimal('100.00'), data=agora)

        resposta = self.client.get(reverse('relatorio_mensal'), {'mes': agora.month, 'ano': agora.year})

        self.assertEqual(resposta.status_code, status.HTTP_200_OK)
        self.assertEqual(resposta['Content-Type'], 'application/pdf')
        self.assertIn(f'relatorio_mei_{agora.month}_{agora.year}.pdf', resposta['Content-Disposition'])
        self.assertTrue(resposta.content.startswith(b'%PDF'))

    def test_relatorio_sem_vendas(self):
        resposta = self.client.get(reverse('relatorio_mensal'), {'mes': 1, 'ano': 2001})

        self.assertEqual(resposta.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resposta.data['message'], 'Nenhuma venda encontrada para o período selecionado.')

    def test_relatorio_mes_invalido(self):
        resposta = self.client.get(reverse('relatorio_mensal'), {'mes': 13, 'ano': 2024})
        self.assertEqual(resposta.status_code, status.HTTP_400_BAD_REQUEST)


class PerfilAPITestCase(APITestCaseBase):

    def test_atualizar_perfil_e_senha(self):
        resposta = self.client.put(reverse('perfil'), {
            'nome': 'Maria Silva', 'email': 'maria@exemplo.com', 'cnpj': '12.345.678/0001-90',
        }, format='json')
        self.assertEqual(resposta.status_code, status.HTTP_200_OK)
        self.assertEqual(resposta.data['usuario']['cnpj'], '12345678000190')

        resposta = self.client.post(reverse('alterar_senha'), {
            'senha_atual': 'segredo', 'nova_senha': 'novasenha', 'confirmar_senha': 'novasenha',
        }, format='json')
        self.assertEqual(resposta.status_code, status.HTTP_200_OK)
        self.usuario.refresh_from_db()
        self.assertTrue(self.usuario.check_password('novasenha'))

    def test_senha_atual_incorreta(self):
        resposta = self.client.post(reverse('alterar_senha'), {
            'senha_atual': 'errada', 'nova_senha': 'novasenha', 'confirmar_senha': 'novasenha',
        }, format='json')

        self.assertEqual(resposta.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resposta.data['message'], 'Senha atual incorreta')
