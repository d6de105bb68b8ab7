"""
Mapeadores (Mappers) para converter entre:
1. Modelos do Django ORM
2. Entidades de Domínio (meivendas.core.entities)
"""
from typing import Any, Optional, Type
from django.db import models
from django.apps import apps

# Importa as entidades do Core
from meivendas.core.entities import (
    Usuario as UsuarioEntity,
    Categoria as CategoriaEntity,
    NotaFiscal as NotaFiscalEntity,
    Venda as VendaEntity,
)

# ====================================================================
# Uso de apps.get_model para evitar dependências circulares
# ====================================================================

def get_model(app_label: str, model_name: str):
    """Retorna um modelo do Django de forma segura (lazy loading)."""
    return apps.get_model(app_label, model_name)


# ====================================================================
# MAPPERS DE CATEGORIA E USUÁRIO
# ====================================================================

class CategoriaMapper:
    """Mapeador para Categoria."""

    @staticmethod
    def to_entity(model: Any) -> Optional[CategoriaEntity]:
        if not model: return None
        return CategoriaEntity(id=model.id, nome=model.nome, ativo=model.ativo)


class UsuarioMapper:
    """Mapeador para o Usuário. O hash da senha nunca chega à entidade."""

    @classmethod
    def model_class(cls) -> Type[models.Model]:
        return get_model('infrastructure', 'Usuario')

    @staticmethod
    def to_entity(model: Any) -> Optional[UsuarioEntity]:
        if not model: return None
        return UsuarioEntity(
            id=model.id,
            cpf=model.cpf,
            nome=model.nome,
            email=model.email,
            cnpj=model.cnpj,
        )

    @classmethod
    def to_model(cls, entity: UsuarioEntity, model: Optional[Any] = None) -> Any:
        if not model:
            model = cls.model_class()(cpf=entity.cpf)
        model.nome = entity.nome
        model.email = entity.email or None
        model.cnpj = entity.cnpj
        return model


# ====================================================================
# MAPPERS DE VENDA E NOTA FISCAL
# ====================================================================

class NotaFiscalMapper:
    """Mapeador para Nota Fiscal."""

    @classmethod
    def model_class(cls) -> Type[models.Model]:
        return get_model('infrastructure', 'NotaFiscal')

    @staticmethod
    def to_entity(model: Any, venda_id: Optional[int] = None) -> Optional[NotaFiscalEntity]:
        if not model: return None
        return NotaFiscalEntity(
            id=model.id,
            numero=model.numero,
            data_emissao=model.data_emissao,
            valor=model.valor,
            usuario_id=model.usuario_id,
            venda_id=venda_id,
        )

    @classmethod
    def to_model(cls, entity: NotaFiscalEntity, model: Optional[Any] = None) -> Any:
        if not model:
            model = cls.model_class()(usuario_id=entity.usuario_id)
        model.numero = entity.numero
        model.valor = entity.valor
        model.data_emissao = entity.data_emissao
        return model


class VendaMapper:
    """Mapeador para Venda, incluindo categoria e nota fiscal."""

    @classmethod
    def model_class(cls) -> Type[models.Model]:
        return get_model('infrastructure', 'Venda')

    @staticmethod
    def to_entity(model: Any) -> Optional[VendaEntity]:
        if not model: return None
        return VendaEntity(
            id=model.id,
            data=model.data,
            valor=model.valor,
            nota_fiscal_emitida=model.nota_fiscal_emitida,
            descricao=model.descricao or "",
            categoria=CategoriaMapper.to_entity(model.categoria),
            nota_fiscal=NotaFiscalMapper.to_entity(model.nota_fiscal, venda_id=model.id),
            usuario_id=model.usuario_id,
        )

    @classmethod
    def to_model(cls, entity: VendaEntity, model: Optional[Any] = None) -> Any:
        """A nota fiscal é vinculada pelo repositório, depois de salva."""
        if not model:
            model = cls.model_class()(usuario_id=entity.usuario_id, data=entity.data)
        model.valor = entity.valor
        model.nota_fiscal_emitida = entity.nota_fiscal_emitida
        model.descricao = entity.descricao or ""
        model.categoria_id = entity.categoria.id
        return model
