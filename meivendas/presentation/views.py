"""
Views da API REST: orquestram a requisição, a execução dos casos de uso e a resposta.
O usuário autenticado é passado explicitamente aos casos de uso (request.user.id).
Exceções do Core são convertidas em respostas pelo meivendas_exception_handler.
"""
from django.contrib.auth import update_session_auth_hash
from django.http import HttpResponse
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema, OpenApiParameter
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from meivendas.core import dependency_injection as di
from meivendas.infrastructure.mappers import UsuarioMapper

from .serializers import (
    CategoriaSerializer,
    PainelSerializer,
    HistoricoSerializer,
    VendaSerializer,
    VendaEntradaSerializer,
    UsuarioSerializer,
    PerfilSerializer,
    AlterarSenhaSerializer,
    RelatorioQuerySerializer,
)


# ====================================================================
# 1. CONSULTAS
# ====================================================================

class CategoriasAPIView(APIView):
    """Categorias disponíveis para novas vendas."""
    permission_classes = [IsAuthenticated]

    @extend_schema(responses=CategoriaSerializer(many=True))
    def get(self, request):
        categorias = di.get_listar_categorias_use_case().executar()
        return Response(CategoriaSerializer(categorias, many=True).data)


class PainelAPIView(APIView):
    """Painel inicial: últimas vendas e total do mês corrente."""
    permission_classes = [IsAuthenticated]

    @extend_schema(responses=PainelSerializer)
    def get(self, request):
        painel = di.get_painel_vendas_use_case().executar(usuario_id=request.user.id)
        return Response(PainelSerializer(painel).data)


# ====================================================================
# 2. VENDAS
# ====================================================================

class VendasAPIView(APIView):
    """
    GET: histórico anual (parâmetros `ano` e `filtro_nf` = todas|com|sem).
    POST: registra uma nova venda.
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(
        parameters=[
            OpenApiParameter('ano', OpenApiTypes.INT, required=False),
            OpenApiParameter('filtro_nf', OpenApiTypes.STR, required=False, enum=['todas', 'com', 'sem']),
        ],
        responses=HistoricoSerializer,
    )
    def get(self, request):
        historico = di.get_historico_vendas_use_case().executar(
            usuario_id=request.user.id,
            ano=request.query_params.get('ano'),
            filtro_nf=request.query_params.get('filtro_nf', 'todas'),
        )
        return Response(HistoricoSerializer(historico).data)

    @extend_schema(request=VendaEntradaSerializer, responses={201: VendaSerializer})
    def post(self, request):
        serializer = VendaEntradaSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dados = serializer.validated_data

        venda = di.get_registrar_venda_use_case().executar(
            usuario_id=request.user.id,
            valor_bruto=dados['valor'],
            nota_fiscal_emitida=dados.get('nota_fiscal_emitida'),
            categoria_id=dados['categoria_id'],
            descricao=dados.get('descricao'),
            numero_nota=dados.get('numero_nota'),
        )
        return Response(
            {'message': 'Venda registrada com sucesso!', 'venda': VendaSerializer(venda).data},
            status=status.HTTP_201_CREATED
        )


class VendaDetalheAPIView(APIView):
    """Detalhe, edição e exclusão de uma venda do próprio usuário."""
    permission_classes = [IsAuthenticated]

    @extend_schema(responses=VendaSerializer)
    def get(self, request, pk):
        venda = di.get_detalhar_venda_use_case().executar(usuario_id=request.user.id, venda_id=pk)
        return Response(VendaSerializer(venda).data)

    @extend_schema(request=VendaEntradaSerializer, responses=VendaSerializer)
    def put(self, request, pk):
        serializer = VendaEntradaSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dados = serializer.validated_data

        venda = di.get_editar_venda_use_case().executar(
            usuario_id=request.user.id,
            venda_id=pk,
            valor_bruto=dados['valor'],
            nota_fiscal_emitida=dados.get('nota_fiscal_emitida'),
            categoria_id=dados['categoria_id'],
            descricao=dados.get('descricao'),
            numero_nota=dados.get('numero_nota'),
        )
        return Response({'message': 'Venda atualizada com sucesso!', 'venda': VendaSerializer(venda).data})

    @extend_schema(responses={204: None})
    def delete(self, request, pk):
        di.get_excluir_venda_use_case().executar(usuario_id=request.user.id, venda_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


# ====================================================================
# 3. RELATÓRIO MENSAL (PDF)
# ====================================================================

class RelatorioMensalAPIView(APIView):
    """Download do Relatório Mensal de Receitas Brutas em PDF."""
    permission_classes = [IsAuthenticated]

    @extend_schema(
        parameters=[RelatorioQuerySerializer],
        responses={(200, 'application/pdf'): OpenApiTypes.BINARY},
    )
    def get(self, request):
        relatorio = di.get_gerar_relatorio_mensal_use_case().executar(
            usuario=UsuarioMapper.to_entity(request.user),
            mes=request.query_params.get('mes'),
            ano=request.query_params.get('ano'),
        )
        response = HttpResponse(relatorio.conteudo, content_type=relatorio.content_type)
        response['Content-Disposition'] = f'attachment; filename="{relatorio.nome_arquivo}"'
        return response


# ====================================================================
# 4. PERFIL
# ====================================================================

class PerfilAPIView(APIView):
    """Dados cadastrais do usuário logado."""
    permission_classes = [IsAuthenticated]

    @extend_schema(responses=UsuarioSerializer)
    def get(self, request):
        return Response(UsuarioSerializer(UsuarioMapper.to_entity(request.user)).data)

    @extend_schema(request=PerfilSerializer, responses=UsuarioSerializer)
    def put(self, request):
        serializer = PerfilSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dados = serializer.validated_data

        usuario = di.get_atualizar_perfil_use_case().executar(
            usuario_id=request.user.id,
            nome=dados['nome'],
            email=dados['email'],
            cnpj=dados.get('cnpj'),
        )
        return Response({'message': 'Perfil atualizado com sucesso!', 'usuario': UsuarioSerializer(usuario).data})


class AlterarSenhaAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(request=AlterarSenhaSerializer, responses={200: None})
    def post(self, request):
        serializer = AlterarSenhaSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dados = serializer.validated_data

        di.get_alterar_senha_use_case().executar(
            usuario_id=request.user.id,
            senha_atual=dados['senha_atual'],
            nova_senha=dados['nova_senha'],
            confirmar_senha=dados['confirmar_senha'],
        )
        # Mantém a sessão atual válida após a troca do hash
        request.user.refresh_from_db()
        if request.session.session_key:
            update_session_auth_hash(request, request.user)
        return Response({'message': 'Senha alterada com sucesso!'})
