# meivendas/presentation/views_auth.py
"""
Views para autenticação e cadastro de usuários (sessão Django).
Os tokens JWT são emitidos pelas views do simplejwt registradas em urls.py.
"""
import logging

from django.contrib.auth import get_user_model, login, logout
from drf_spectacular.utils import extend_schema
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from meivendas.core import dependency_injection as di

from .serializers import CadastroSerializer, LoginSerializer, UsuarioSerializer

logger = logging.getLogger(__name__)


class CadastroUsuarioAPIView(APIView):
    """
    Cadastro de um novo MEI. Não inicia sessão: o usuário faz login em seguida.
    """
    permission_classes = [AllowAny]

    @extend_schema(request=CadastroSerializer, responses={201: UsuarioSerializer})
    def post(self, request):
        serializer = CadastroSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dados = serializer.validated_data

        usuario = di.get_cadastrar_usuario_use_case().executar(
            cpf=dados['cpf'],
            nome=dados['nome'],
            senha=dados['senha'],
            confirmar_senha=dados['confirmar_senha'],
            email=dados.get('email'),
            cnpj=dados.get('cnpj'),
        )
        return Response(
            {'message': 'Cadastro realizado com sucesso! Faça login para continuar.',
             'usuario': UsuarioSerializer(usuario).data},
            status=status.HTTP_201_CREATED
        )


class LoginAPIView(APIView):
    """
    Login por CPF e senha. CPF inexistente e senha incorreta têm a mesma resposta.
    """
    permission_classes = [AllowAny]

    @extend_schema(request=LoginSerializer, responses=UsuarioSerializer)
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        usuario = di.get_autenticar_usuario_use_case().executar(
            cpf=serializer.validated_data['cpf'],
            senha=serializer.validated_data['senha'],
        )
        user = get_user_model().objects.get(pk=usuario.id)
        login(request, user, backend='django.contrib.auth.backends.ModelBackend')
        logger.info("Usuário %s autenticado por sessão.", usuario.id)

        return Response({
            'message': f'Bem-vindo(a), {usuario.nome}!',
            'usuario': UsuarioSerializer(usuario).data,
        })


class LogoutAPIView(APIView):
    """
    Encerra a sessão do usuário.
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(request=None, responses={200: None})
    def post(self, request):
        logout(request)
        return Response({'message': 'Você saiu do sistema.'})
