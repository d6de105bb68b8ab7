"""
Camada de Infraestrutura: Implementação dos Repositórios.

Esta camada traduz as operações abstratas definidas nas Portas da Core
em chamadas concretas ao Django ORM. Qualquer DatabaseError é convertido
em PersistenciaError antes de chegar aos casos de uso.
"""
import functools
import logging
from typing import List, Optional

from django.db import transaction, DatabaseError

# Importação Lenta (Lazy Loading) para Modelos Django
from django.apps import apps

# Importações da Camada CORE (ENTIDADES e PORTAS)
from meivendas.core.entities import Venda, Categoria, Usuario, NF_EMITIDA, NF_NAO_EMITIDA
from meivendas.core.ports import (
    IVendaRepository,
    ICategoriaRepository,
    IUsuarioRepository,
)
from meivendas.core.exceptions import PersistenciaError, UsuarioNaoEncontradoError

from .mappers import CategoriaMapper, NotaFiscalMapper, UsuarioMapper, VendaMapper

logger = logging.getLogger(__name__)

FILTRO_POR_NF = {
    "com": NF_EMITIDA,
    "sem": NF_NAO_EMITIDA,
}


# ====================================================================
# 1. HELPERS
# ====================================================================

def get_model(app_label, model_name):
    """Busca o modelo Django de forma segura (Lazy Loading)."""
    return apps.get_model(app_label, model_name)


def traduzir_erros_banco(metodo):
    """Converte falhas do banco (conexão, restrições) em PersistenciaError."""
    @functools.wraps(metodo)
    def wrapper(*args, **kwargs):
        try:
            return metodo(*args, **kwargs)
        except DatabaseError as e:
            logger.error("Falha de persistência em %s: %s", metodo.__qualname__, e, exc_info=True)
            raise PersistenciaError() from e
    return wrapper


# ====================================================================
# 2. REPOSITÓRIOS (Implementação Django ORM)
# ====================================================================

class VendaRepositoryDjango(IVendaRepository):
    """Implementação do VendaRepository usando o Django ORM."""

    # Propriedades para carregar modelos de forma LAZY
    @property
    def VendaModel(self):
        return get_model('infrastructure', 'Venda')

    @property
    def NotaFiscalModel(self):
        return get_model('infrastructure', 'NotaFiscal')

    def _queryset(self):
        return self.VendaModel.objects.select_related('categoria', 'nota_fiscal')

    def _carregar(self, venda_id: int) -> Venda:
        return VendaMapper.to_entity(self._queryset().get(pk=venda_id))

    @traduzir_erros_banco
    @transaction.atomic
    def registrar(self, venda: Venda) -> Venda:
        """Insere a nota fiscal primeiro e depois a venda que a referencia."""
        model = VendaMapper.to_model(venda)
        if venda.nota_fiscal is not None:
            nota_model = NotaFiscalMapper.to_model(venda.nota_fiscal)
            nota_model.save()
            model.nota_fiscal = nota_model
        model.save()
        return self._carregar(model.pk)

    @traduzir_erros_banco
    @transaction.atomic
    def atualizar(self, venda: Venda) -> Venda:
        model = self.VendaModel.objects.select_for_update().get(pk=venda.id)
        model = VendaMapper.to_model(venda, model)

        if venda.nota_fiscal is None:
            # Desvincula; a nota fiscal permanece registrada
            model.nota_fiscal = None
        else:
            nota_model = None
            if venda.nota_fiscal.id:
                nota_model = self.NotaFiscalModel.objects.get(pk=venda.nota_fiscal.id)
            nota_model = NotaFiscalMapper.to_model(venda.nota_fiscal, nota_model)
            nota_model.save()
            model.nota_fiscal = nota_model

        model.save()
        return self._carregar(model.pk)

    @traduzir_erros_banco
    def buscar_por_id(self, venda_id: int) -> Optional[Venda]:
        try:
            return self._carregar(venda_id)
        except self.VendaModel.DoesNotExist:
            return None

    @traduzir_erros_banco
    def listar_por_periodo(self, usuario_id: int, mes: int, ano: int) -> List[Venda]:
        # data__year/data__month respeitam o fuso horário corrente (USE_TZ)
        qs = self._queryset().filter(
            usuario_id=usuario_id, data__year=ano, data__month=mes
        ).order_by('data', 'id')
        return [VendaMapper.to_entity(model) for model in qs]

    @traduzir_erros_banco
    def listar_recentes(self, usuario_id: int, limite: int = 10) -> List[Venda]:
        qs = self._queryset().filter(usuario_id=usuario_id).order_by('-data', '-id')[:limite]
        return [VendaMapper.to_entity(model) for model in qs]

    @traduzir_erros_banco
    def listar_por_ano(self, usuario_id: int, ano: int, filtro_nf: str = "todas") -> List[Venda]:
        qs = self._queryset().filter(usuario_id=usuario_id, data__year=ano)
        if filtro_nf in FILTRO_POR_NF:
            qs = qs.filter(nota_fiscal_emitida=FILTRO_POR_NF[filtro_nf])
        return [VendaMapper.to_entity(model) for model in qs.order_by('-data', '-id')]

    @traduzir_erros_banco
    def listar_anos_com_vendas(self, usuario_id: int) -> List[int]:
        datas = self.VendaModel.objects.filter(usuario_id=usuario_id).datetimes('data', 'year', order='DESC')
        return [data.year for data in datas]

    @traduzir_erros_banco
    def deletar(self, venda_id: int) -> None:
        self.VendaModel.objects.filter(pk=venda_id).delete()


class CategoriaRepositoryDjango(ICategoriaRepository):
    """Implementação do CategoriaRepository usando o Django ORM."""

    @property
    def CategoriaModel(self):
        return get_model('infrastructure', 'Categoria')

    @traduzir_erros_banco
    def buscar_por_id(self, categoria_id: int) -> Optional[Categoria]:
        try:
            return CategoriaMapper.to_entity(self.CategoriaModel.objects.get(pk=categoria_id))
        except self.CategoriaModel.DoesNotExist:
            return None

    @traduzir_erros_banco
    def listar_ativas(self) -> List[Categoria]:
        qs = self.CategoriaModel.objects.filter(ativo=True).order_by('nome')
        return [CategoriaMapper.to_entity(model) for model in qs]


class UsuarioRepositoryDjango(IUsuarioRepository):
    """
    Implementação do UsuarioRepository sobre o modelo de autenticação do Django.
    As senhas usam os hashers do Django (PBKDF2 com salt).
    """

    @property
    def UsuarioModel(self):
        return get_model('infrastructure', 'Usuario')

    def _get_model(self, usuario_id: int):
        try:
            return self.UsuarioModel.objects.get(pk=usuario_id)
        except self.UsuarioModel.DoesNotExist:
            raise UsuarioNaoEncontradoError()

    @traduzir_erros_banco
    def buscar_por_id(self, usuario_id: int) -> Optional[Usuario]:
        return UsuarioMapper.to_entity(self.UsuarioModel.objects.filter(pk=usuario_id).first())

    @traduzir_erros_banco
    def buscar_por_cpf(self, cpf: str) -> Optional[Usuario]:
        return UsuarioMapper.to_entity(self.UsuarioModel.objects.filter(cpf=cpf).first())

    @traduzir_erros_banco
    def buscar_por_email(self, email: str) -> Optional[Usuario]:
        return UsuarioMapper.to_entity(self.UsuarioModel.objects.filter(email__iexact=email).first())

    @traduzir_erros_banco
    @transaction.atomic
    def criar(self, usuario: Usuario, senha: str) -> Usuario:
        model = self.UsuarioModel.objects.create_user(
            cpf=usuario.cpf,
            password=senha,
            nome=usuario.nome,
            email=usuario.email,
            cnpj=usuario.cnpj,
        )
        return UsuarioMapper.to_entity(model)

    @traduzir_erros_banco
    def atualizar(self, usuario: Usuario) -> Usuario:
        model = UsuarioMapper.to_model(usuario, self._get_model(usuario.id))
        model.save(update_fields=['nome', 'email', 'cnpj'])
        return UsuarioMapper.to_entity(model)

    @traduzir_erros_banco
    def verificar_senha(self, usuario_id: int, senha: str) -> bool:
        model = self.UsuarioModel.objects.filter(pk=usuario_id, is_active=True).first()
        return model is not None and model.check_password(senha)

    @traduzir_erros_banco
    def definir_senha(self, usuario_id: int, senha: str) -> None:
        model = self._get_model(usuario_id)
        model.set_password(senha)
        model.save(update_fields=['password'])
