# meivendas/core/validadores.py
"""
Funções puras de validação e normalização dos campos recebidos dos formulários.
Levantam DadosInvalidosError com a mensagem que será exibida ao usuário.
"""
import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from meivendas.core.entities import NF_EMITIDA, NF_NAO_EMITIDA
from meivendas.core.exceptions import DadosInvalidosError

CENTAVOS = Decimal("0.01")
VALOR_LIMITE = Decimal("10000000000")
TAMANHO_MINIMO_SENHA = 6
ANO_MINIMO = 2000
ANO_MAXIMO = 2100

_VALOR_PERMITIDO = re.compile(r"^[0-9.,]+$")
_MILHAR_COM_PONTO = re.compile(r"^\d{1,3}(\.\d{3})*$")
_MILHAR_COM_VIRGULA = re.compile(r"^\d{1,3}(,\d{3})*$")


def parse_valor_monetario(valor_bruto) -> Decimal:
    """
    Converte o valor digitado ("150,50", "150.50", "1.234,56", "R$ 10") em Decimal
    com duas casas. Quando '.' e ',' aparecem juntos, o último é o separador decimal.
    """
    if valor_bruto is None or str(valor_bruto).strip() == "":
        raise DadosInvalidosError("Valor é obrigatório!")

    texto = str(valor_bruto).strip().replace("R$", "").replace(" ", "")
    if not texto or not _VALOR_PERMITIDO.match(texto):
        raise DadosInvalidosError("Valor inválido!")

    if "," in texto and "." in texto:
        if texto.rfind(",") > texto.rfind("."):
            inteiro, _, decimal = texto.rpartition(",")
            agrupamento = _MILHAR_COM_PONTO
        else:
            inteiro, _, decimal = texto.rpartition(".")
            agrupamento = _MILHAR_COM_VIRGULA
        # separador de milhar só na parte inteira, em grupos de três dígitos
        if not agrupamento.match(inteiro) or not decimal.isdigit():
            raise DadosInvalidosError("Valor inválido!")
        texto = inteiro.replace(".", "").replace(",", "") + "." + decimal
    elif "," in texto:
        if texto.count(",") > 1:
            raise DadosInvalidosError("Valor inválido!")
        texto = texto.replace(",", ".")
    elif texto.count(".") > 1:
        raise DadosInvalidosError("Valor inválido!")

    try:
        valor = Decimal(texto)
    except InvalidOperation:
        raise DadosInvalidosError("Valor inválido!")

    if valor.as_tuple().exponent < -2:
        raise DadosInvalidosError("Valor deve ter no máximo duas casas decimais!")
    if valor <= 0:
        raise DadosInvalidosError("Valor deve ser maior que zero!")
    if valor >= VALOR_LIMITE:
        raise DadosInvalidosError("Valor muito alto!")

    return valor.quantize(CENTAVOS)


def normalizar_flag_nf(flag: Optional[str]) -> str:
    """Aceita 'S'/'N' (qualquer caixa). Vazio equivale a 'N'."""
    if flag is None or str(flag).strip() == "":
        return NF_NAO_EMITIDA
    flag = str(flag).strip().upper()
    if flag not in (NF_EMITIDA, NF_NAO_EMITIDA):
        raise DadosInvalidosError("Indicação de Nota Fiscal inválida! Use 'S' ou 'N'.")
    return flag


def somente_digitos(texto: Optional[str]) -> str:
    return re.sub(r"[^0-9]", "", texto or "")


def normalizar_cpf(cpf: Optional[str]) -> str:
    cpf = somente_digitos(cpf)
    if not cpf:
        raise DadosInvalidosError("CPF é obrigatório!")
    if len(cpf) != 11:
        raise DadosInvalidosError("CPF deve ter 11 dígitos!")
    return cpf


def normalizar_cnpj(cnpj: Optional[str]) -> Optional[str]:
    """CNPJ é opcional; quando informado precisa ter 14 dígitos."""
    if cnpj is None or not cnpj.strip():
        return None
    cnpj = somente_digitos(cnpj)
    if len(cnpj) != 14:
        raise DadosInvalidosError("CNPJ deve ter 14 dígitos!")
    return cnpj


def validar_nova_senha(senha: Optional[str], confirmacao: Optional[str]) -> str:
    if not senha:
        raise DadosInvalidosError("Senha é obrigatória!")
    if not confirmacao:
        raise DadosInvalidosError("Confirmação de senha é obrigatória!")
    if len(senha) < TAMANHO_MINIMO_SENHA:
        raise DadosInvalidosError(
            f"Senha deve ter no mínimo {TAMANHO_MINIMO_SENHA} caracteres!"
        )
    if senha != confirmacao:
        raise DadosInvalidosError("Senhas não coincidem!")
    return senha


def validar_periodo(mes, ano) -> tuple:
    """Valida mês (1-12) e ano do relatório, aceitando strings numéricas."""
    if mes in (None, "") or ano in (None, ""):
        raise DadosInvalidosError("Mês e ano são obrigatórios!")
    try:
        mes, ano = int(mes), int(ano)
    except (TypeError, ValueError):
        raise DadosInvalidosError("Mês ou ano inválido!")
    if not 1 <= mes <= 12:
        raise DadosInvalidosError("Mês deve estar entre 1 e 12!")
    if not ANO_MINIMO <= ano <= ANO_MAXIMO:
        raise DadosInvalidosError("Ano inválido!")
    return mes, ano
