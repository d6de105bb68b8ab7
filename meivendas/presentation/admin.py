# Configuração da interface administrativa do Django para os modelos do MEI Vendas.

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from meivendas.infrastructure.models import Usuario, Categoria, NotaFiscal, Venda

# ====================================================================
# 1. ADMIN PERSONALIZADO PARA USUÁRIOS (login por CPF)
# ====================================================================

@admin.register(Usuario)
class UsuarioAdmin(BaseUserAdmin):
    """Customização do modelo Usuario. O campo 'username' não existe: usa-se o CPF."""

    list_display = ('cpf', 'nome', 'email', 'cnpj', 'is_staff', 'is_active')
    list_filter = ('is_staff', 'is_superuser', 'is_active')

    fieldsets = (
        (None, {'fields': ('cpf', 'password')}),
        ('Informações de Perfil', {'fields': ('nome', 'email', 'cnpj')}),
        ('Permissões', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Datas', {'fields': ('last_login', 'date_joined')}),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('cpf', 'nome', 'password1', 'password2'),
        }),
    )

    search_fields = ('cpf', 'nome', 'email')
    ordering = ('cpf',)


# ====================================================================
# 2. ADMIN PARA CATEGORIAS
# ====================================================================

@admin.register(Categoria)
class CategoriaAdmin(admin.ModelAdmin):
    list_display = ('nome', 'ativo')
    list_filter = ('ativo',)
    search_fields = ('nome',)


# ====================================================================
# 3. ADMIN PARA VENDAS E NOTAS FISCAIS
# ====================================================================

@admin.register(Venda)
class VendaAdmin(admin.ModelAdmin):
    list_display = ('id', 'usuario', 'data', 'valor', 'categoria', 'nota_fiscal_emitida')
    list_filter = ('nota_fiscal_emitida', 'categoria', 'data')
    search_fields = ('id', 'usuario__cpf', 'usuario__nome', 'descricao')
    date_hierarchy = 'data'
    raw_id_fields = ('usuario', 'nota_fiscal')


@admin.register(NotaFiscal)
class NotaFiscalAdmin(admin.ModelAdmin):
    list_display = ('numero', 'usuario', 'data_emissao', 'valor')
    search_fields = ('numero', 'usuario__cpf', 'usuario__nome')
    date_hierarchy = 'data_emissao'
    raw_id_fields = ('usuario',)
