"""
Serializers da API.

Os serializers de entrada só garantem o formato dos campos; as regras de
negócio (valor monetário, CPF, senha...) ficam nos casos de uso. Os de saída
leem diretamente as entidades do Core.
"""
from rest_framework import serializers


# ====================================================================
# SERIALIZERS DE SAÍDA (Entidades do Core)
# ====================================================================

class CategoriaSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    nome = serializers.CharField()


class NotaFiscalSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    numero = serializers.CharField()
    data_emissao = serializers.DateTimeField()
    valor = serializers.DecimalField(max_digits=12, decimal_places=2)


class VendaSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    data = serializers.DateTimeField()
    valor = serializers.DecimalField(max_digits=12, decimal_places=2)
    nota_fiscal_emitida = serializers.CharField()
    nota_emitida = serializers.BooleanField()
    descricao = serializers.CharField()
    categoria = CategoriaSerializer()
    nota_fiscal = NotaFiscalSerializer(allow_null=True)


class PainelSerializer(serializers.Serializer):
    ultimas_vendas = VendaSerializer(many=True)
    total_mes = serializers.DecimalField(max_digits=14, decimal_places=2)


class HistoricoSerializer(serializers.Serializer):
    ano = serializers.IntegerField()
    anos = serializers.ListField(child=serializers.IntegerField())
    filtro_nf = serializers.CharField()
    vendas = VendaSerializer(many=True)
    total_vendas = serializers.IntegerField()
    total_valor = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_com_nf = serializers.IntegerField()
    total_sem_nf = serializers.IntegerField()
    valor_com_nf = serializers.DecimalField(max_digits=14, decimal_places=2)
    valor_sem_nf = serializers.DecimalField(max_digits=14, decimal_places=2)


class UsuarioSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    cpf = serializers.CharField()
    cpf_formatado = serializers.CharField()
    nome = serializers.CharField()
    email = serializers.EmailField(allow_null=True)
    cnpj = serializers.CharField(allow_null=True)


# ====================================================================
# SERIALIZERS DE ENTRADA
# ====================================================================

class VendaEntradaSerializer(serializers.Serializer):
    """Formulário de venda. O valor é texto livre ("150,50", "R$ 1.234,56")."""
    valor = serializers.CharField(max_length=30)
    nota_fiscal_emitida = serializers.CharField(max_length=1, required=False, allow_blank=True, default='N')
    categoria_id = serializers.IntegerField()
    descricao = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    numero_nota = serializers.CharField(
        max_length=50, required=False, allow_blank=True, allow_null=True,
        help_text="Obrigatório quando nota_fiscal_emitida = 'S'"
    )


class CadastroSerializer(serializers.Serializer):
    cpf = serializers.CharField(max_length=14)
    nome = serializers.CharField(max_length=150)
    senha = serializers.CharField(write_only=True, trim_whitespace=False)
    confirmar_senha = serializers.CharField(write_only=True, trim_whitespace=False)
    email = serializers.CharField(max_length=254, required=False, allow_blank=True, allow_null=True)
    cnpj = serializers.CharField(max_length=18, required=False, allow_blank=True, allow_null=True)


class LoginSerializer(serializers.Serializer):
    cpf = serializers.CharField(max_length=14)
    senha = serializers.CharField(write_only=True, trim_whitespace=False)


class PerfilSerializer(serializers.Serializer):
    nome = serializers.CharField(max_length=150)
    email = serializers.CharField(max_length=254, allow_blank=True)
    cnpj = serializers.CharField(max_length=18, required=False, allow_blank=True, allow_null=True)


class AlterarSenhaSerializer(serializers.Serializer):
    senha_atual = serializers.CharField(write_only=True, trim_whitespace=False)
    nova_senha = serializers.CharField(write_only=True, trim_whitespace=False)
    confirmar_senha = serializers.CharField(write_only=True, trim_whitespace=False)


class RelatorioQuerySerializer(serializers.Serializer):
    """Usado apenas na documentação do endpoint; a validação do período é do Core."""
    mes = serializers.IntegerField(help_text="1 a 12")
    ano = serializers.IntegerField(help_text="2000 a 2100")
