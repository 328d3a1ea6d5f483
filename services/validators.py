"""Валидаторы и нормализаторы входных данных формы клиента."""

import ast
import math
import operator as op
import re


EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+$")
CURRENCY_RE = re.compile(r"[$€₽]")
# после удаления валюты в ставке допустимы только цифры и знаки выражений
RATE_EXPR_RE = re.compile(r"^[\d.+\-*/%()]+$")


def normalize_email(email: str | None) -> str:
    """Убирает пробелы по краям, остальное оставляет как ввёл пользователь."""
    return (email or "").strip()


def is_valid_email(email: str | None) -> bool:
    return bool(EMAIL_RE.match((email or "").strip()))


def normalize_number(value: str | int | float | None) -> str | None:
    """Нормализует строку с числом и поддерживает простые выражения.

    Помимо удаления пробелов/букв и замены запятой на точку можно
    вводить простые математические выражения и проценты, например ``10*10``
    или ``5+5``. Процент записывается как ``10%`` и интерпретируется как
    ``10/100``.
    """

    if value is None:
        return None

    text = str(value)
    text = re.sub(r"\s+", "", text)
    text = text.replace("\u00a0", "")
    text = text.replace(",", ".")
    text = re.sub(r"[a-zA-Zа-яА-Я$€₽]+", "", text)
    text = text.rstrip(".")

    if text == "":
        return text

    expr = re.sub(r"(\d+(?:\.\d+)?)%", r"(\1/100)", text)

    try:
        node = ast.parse(expr, mode="eval").body

        allowed = {
            ast.Add: op.add,
            ast.Sub: op.sub,
            ast.Mult: op.mul,
            ast.Div: op.truediv,
        }

        def _eval(n):
            if isinstance(n, ast.Constant):
                return n.value
            if isinstance(n, ast.UnaryOp) and isinstance(n.op, ast.USub):
                return -_eval(n.operand)
            if isinstance(n, ast.BinOp) and type(n.op) in allowed:
                return allowed[type(n.op)](_eval(n.left), _eval(n.right))
            raise ValueError("Недопустимое выражение")

        result = _eval(node)
        if isinstance(result, float) and result.is_integer():
            result = int(result)
        return str(result)
    except Exception:
        return text


def parse_rate(value: str | int | float | None) -> float | None:
    """Преобразует ставку из поля формы в число.

    Сначала текст читается как обычное число (в том числе ``1e3``),
    затем как простое выражение ``normalize_number``. Пустое значение
    означает отсутствие ставки, любые буквы кроме знака валюты
    приводят к ``ValueError``.
    """
    if value is None or not str(value).strip():
        return None
    error = ValueError(f"Некорректная ставка: {value!r}")
    text = CURRENCY_RE.sub("", str(value))
    text = re.sub(r"\s+", "", text).replace(",", ".")
    if not text:
        raise error
    try:
        rate = float(text)
    except ValueError:
        if not RATE_EXPR_RE.match(text):
            raise error from None
        try:
            rate = float(normalize_number(text))
        except ValueError:
            raise error from None
    if not math.isfinite(rate):
        raise error
    return rate
