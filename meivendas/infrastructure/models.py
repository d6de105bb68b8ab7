# Define os modelos do banco de dados para a camada de infraestrutura.

from django.db import models
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.conf import settings
from django.utils import timezone

# ====================================================================
# GERENCIADOR DE USUÁRIOS PERSONALIZADO (Para usar CPF como login)
# ====================================================================

class CustomUserManager(BaseUserManager):
    """
    Gerenciador de modelos de usuário onde o CPF é o identificador único
    para autenticação, em vez dos nomes de usuário.
    """
    def create_user(self, cpf, password=None, **extra_fields):
        if not cpf:
            raise ValueError('O CPF deve ser definido')
        email = extra_fields.pop('email', None)
        if email:
            extra_fields['email'] = self.normalize_email(email)
        user = self.model(cpf=cpf, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, cpf, password=None, **extra_fields):
        """
        Cria e salva um Superusuário com o CPF e senha fornecidos.
        """
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')

        return self.create_user(cpf, password, **extra_fields)


# ====================================================================
# MODELO DE USUÁRIO
# ====================================================================

class Usuario(AbstractUser):
    """
    Microempreendedor Individual. O CPF (somente dígitos) é o login.
    """
    # Remove o campo username padrão
    username = None
    first_name = None
    last_name = None

    cpf = models.CharField('CPF', max_length=11, unique=True)
    nome = models.CharField('Nome', max_length=150)
    # E-mail opcional, mas único quando informado
    email = models.EmailField('Endereço de E-mail', unique=True, blank=True, null=True)
    cnpj = models.CharField('CNPJ', max_length=14, blank=True, null=True)

    USERNAME_FIELD = 'cpf'
    REQUIRED_FIELDS = ['nome']

    objects = CustomUserManager()

    class Meta:
        verbose_name = 'Usuário'
        verbose_name_plural = 'Usuários'
        db_table = 'mei_usuario'

    def __str__(self):
        return f"{self.nome} ({self.cpf})"

    def clean(self):
        super().clean()
        # E-mail em branco vira NULL para não violar a unicidade
        if not self.email:
            self.email = None

    def get_full_name(self):
        return self.nome

    def get_short_name(self):
        return self.nome


# ====================================================================
# CATEGORIAS, NOTAS FISCAIS E VENDAS
# ====================================================================

class Categoria(models.Model):
    nome = models.CharField('Nome', max_length=100, unique=True)
    ativo = models.BooleanField('Ativa', default=True)

    class Meta:
        verbose_name = 'Categoria'
        verbose_name_plural = 'Categorias'
        db_table = 'mei_categoria'
        ordering = ['nome']

    def __str__(self):
        return self.nome


class NotaFiscal(models.Model):
    """
    Nota Fiscal emitida para uma venda. Não é apagada junto com a venda.
    """
    numero = models.CharField('Número', max_length=50)
    data_emissao = models.DateTimeField('Data de Emissão', default=timezone.now)
    valor = models.DecimalField('Valor', max_digits=12, decimal_places=2)
    usuario = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='notas_fiscais'
    )

    class Meta:
        verbose_name = 'Nota Fiscal'
        verbose_name_plural = 'Notas Fiscais'
        db_table = 'mei_nota_fiscal'
        ordering = ['-data_emissao']

    def __str__(self):
        return f"NF {self.numero}"


class Venda(models.Model):
    NF_CHOICES = [
        ('S', 'Sim'),
        ('N', 'Não'),
    ]

    data = models.DateTimeField('Data', default=timezone.now, db_index=True)
    valor = models.DecimalField('Valor', max_digits=12, decimal_places=2)
    nota_fiscal_emitida = models.CharField('NF Emitida', max_length=1, choices=NF_CHOICES, default='N')
    descricao = models.CharField('Descrição', max_length=255, blank=True, default='')
    categoria = models.ForeignKey(Categoria, on_delete=models.PROTECT, related_name='vendas')
    nota_fiscal = models.OneToOneField(
        NotaFiscal, on_delete=models.SET_NULL, null=True, blank=True, related_name='venda'
    )
    usuario = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='vendas'
    )

    class Meta:
        verbose_name = 'Venda'
        verbose_name_plural = 'Vendas'
        db_table = 'mei_venda'
        ordering = ['-data', '-id']

    def __str__(self):
        return f"Venda {self.id} - R$ {self.valor}"
