import datetime
import decimal
import functools
import json
import logging
import pathlib
import re
import typing

from beancount_parser.data_types import Entry
from beancount_parser.data_types import EntryType
from beancount_parser.data_types import Metadata
from beancount_parser.data_types import Posting as EntryPosting
from beancount_parser.helpers import collect_entries
from beancount_parser.helpers import get_entry_type
from beancount_parser.parser import make_parser
from lark import Lark
from lark import Token
from lark import Tree
from lark.exceptions import UnexpectedCharacters
from lark.exceptions import UnexpectedInput
from lark.exceptions import UnexpectedToken

from beancount_tui.data_types import (
    Amount,
    Directive,
    MetadataItem,
    ParsedPosting,
    ParsedTransaction,
)
from beancount_tui.environment import VERBOSE_LOG_LEVEL

logger = logging.getLogger("beancount_tui")


class BeancountParseError(Exception):
    def __init__(
        self,
        detail: str,
        line: int | None = None,
        column: int | None = None,
        path: pathlib.Path | None = None,
    ):
        self.detail = detail
        self.line = line
        self.column = column
        self.path = path

    def __str__(self):
        location = str(self.path) if self.path is not None else "<string>"
        if self.line is not None:
            location += f":{self.line}"
            if self.column is not None:
                location += f":{self.column}"
        return f"Failed to parse {location}: {self.detail}"


@functools.cache
def get_parser() -> Lark:
    return make_parser()


def parse_date(value: str) -> datetime.date:
    year, month, day = map(int, re.split(r"[-/]", value))
    return datetime.date(year, month, day)


def parse_string(token: Token) -> str:
    # beancount strings may span multiple lines
    return json.loads(token.value, strict=False)


def evaluate_number(value: Tree | Token) -> decimal.Decimal:
    if isinstance(value, Token):
        if value.type != "NUMBER":
            raise ValueError(f"Unexpected token type {value.type}")
        return decimal.Decimal(value.value.replace(",", ""))
    if value.data == "number_expr":
        return evaluate_number(value.children[0])
    elif value.data == "number_atom":
        unary_op, atom = value.children
        number = evaluate_number(atom)
        return number.copy_negate() if unary_op.value == "-" else number
    elif value.data in ("number_add_expr", "number_mul_expr"):
        result = evaluate_number(value.children[0])
        for op, operand in zip(value.children[1::2], value.children[2::2]):
            number = evaluate_number(operand)
            if op.value == "+":
                result += number
            elif op.value == "-":
                result -= number
            elif op.value == "*":
                result *= number
            elif op.value == "/":
                result /= number
            else:
                raise ValueError(f"Unexpected operator {op.value}")
        return result
    else:
        raise ValueError(f"Unexpected number tree {value.data}")


def parse_number(tree: Tree) -> decimal.Decimal:
    try:
        return evaluate_number(tree)
    except decimal.DecimalException as exc:
        raise BeancountParseError(
            f"Invalid number expression ({exc.__class__.__name__})",
            line=tree.meta.line,
            column=tree.meta.column,
        ) from exc


def parse_amount(tree: Tree) -> Amount:
    number, currency = tree.children
    return Amount(number=parse_number(number), currency=currency.value)


def token_text(value: Token | Tree) -> str:
    if isinstance(value, Token):
        if value.type == "ESCAPED_STRING":
            return parse_string(value)
        return value.value
    if value.data == "currencies":
        return ",".join(child.value for child in value.children)
    elif value.data == "amount":
        amount = parse_amount(value)
        return f"{amount.number} {amount.currency}"
    elif value.data == "amount_tolerance":
        number, tolerance, currency = value.children
        return f"{parse_number(number)} ~ {parse_number(tolerance)} {currency.value}"
    elif value.data == "number_expr":
        return str(parse_number(value))
    else:
        raise ValueError(f"Unexpected tree {value.data}")


def cost_text(tree: Tree) -> str:
    if tree.data == "total_cost":
        return "{{" + token_text(tree.children[0]) + "}}"
    elif tree.data == "both_cost":
        number, amount = tree.children
        return "{" + f"{parse_number(number)} # {token_text(amount)}" + "}"
    elif tree.data == "cost_spec":
        items = []
        for item in tree.children:
            child = item.children[0]
            # keep strings quoted, the cost is carried as text
            items.append(child.value if isinstance(child, Token) else token_text(child))
        return "{" + ", ".join(items) + "}"
    else:
        raise ValueError(f"Unexpected cost tree {tree.data}")


def parse_metadata(metadata: Metadata) -> MetadataItem:
    key, value = metadata.statement.children[0].children
    return MetadataItem(key=key.value, value=token_text(value))


def parse_posting(posting: EntryPosting) -> ParsedPosting:
    tree = posting.statement.children[0].children[0]
    if tree.data == "detailed_posting":
        flag, account, amount, cost, price = tree.children
    elif tree.data == "simple_posting":
        flag, account = tree.children
        amount = cost = price = None
    else:
        raise ValueError(f"Unexpected posting tree {tree.data}")
    return ParsedPosting(
        account=account.value,
        flag=flag.value if flag is not None else None,
        amount=parse_amount(amount) if amount is not None else None,
        cost=cost_text(cost) if cost is not None else None,
        price=parse_amount(price.children[0]) if price is not None else None,
        metadata=tuple(map(parse_metadata, posting.metadata)),
    )


def parse_transaction(tree: Tree, entry: Entry) -> ParsedTransaction:
    _, flag, payee, narration, annotations = tree.children
    tags: list[str] = []
    links: list[str] = []
    if annotations is not None:
        for token in annotations.children:
            if token.type == "TAG":
                tags.append(token.value[1:])
            elif token.type == "LINK":
                links.append(token.value[1:])
            else:
                raise ValueError(f"Unexpected annotation {token.type}")
    return ParsedTransaction(
        # the txn keyword stands for the default flag
        flag=flag.value if flag is not None and flag.type == "FLAG" else None,
        payee=parse_string(payee) if payee is not None else None,
        narration=parse_string(narration) if narration is not None else None,
        tags=tuple(tags),
        links=tuple(links),
        metadata=tuple(map(parse_metadata, entry.metadata)),
        postings=tuple(map(parse_posting, entry.postings)),
    )


def to_directive(entry: Entry) -> Directive:
    first_child: Tree = entry.statement.children[0]
    lineno = first_child.meta.line
    if first_child.data == "date_directive":
        body = first_child.children[0]
        date = parse_date(body.children[0].value)
        if entry.type == EntryType.TXN:
            return Directive(
                type=entry.type,
                lineno=lineno,
                date=date,
                transaction=parse_transaction(body, entry),
            )
        args = body.children[1:]
    elif first_child.data == "simple_directive":
        body = first_child.children[0]
        date = None
        args = body.children
    else:
        raise ValueError(f"Unexpected directive {first_child.data}")
    return Directive(
        type=entry.type,
        lineno=lineno,
        date=date,
        args=tuple(token_text(arg) for arg in args if arg is not None),
        metadata=tuple(map(parse_metadata, entry.metadata)),
    )


def check_statements(tree: Tree):
    """Report posting and metadata lines without an entry to belong to"""
    last_type: EntryType | None = None
    for statement in tree.children:
        if statement is None:
            continue
        first_child = statement.children[0]
        if isinstance(first_child, Token):
            if first_child.type == "SECTION_HEADER":
                last_type = EntryType.SECTION_HEADER
            continue
        if first_child.data == "posting":
            if last_type != EntryType.TXN:
                raise BeancountParseError(
                    "Posting does not belong to a transaction",
                    line=statement.meta.line,
                )
        elif first_child.data == "metadata_item":
            if last_type is None:
                raise BeancountParseError(
                    "Metadata does not belong to a directive",
                    line=statement.meta.line,
                )
        else:
            last_type = get_entry_type(statement)


def parse_text(text: str, path: pathlib.Path | None = None) -> list[Directive]:
    if not text.endswith("\n"):
        text += "\n"
    try:
        tree = get_parser().parse(text)
    except UnexpectedCharacters as exc:
        raise BeancountParseError(
            f"Unexpected character {exc.char!r}",
            line=exc.line,
            column=exc.column,
            path=path,
        ) from exc
    except UnexpectedToken as exc:
        raise BeancountParseError(
            f"Unexpected token {exc.token.value!r}",
            line=exc.line,
            column=exc.column,
            path=path,
        ) from exc
    except UnexpectedInput as exc:
        raise BeancountParseError(
            "Unexpected end of input", line=exc.line, column=exc.column, path=path
        ) from exc
    try:
        check_statements(tree)
        entries, _ = collect_entries(tree)
        directives = [
            to_directive(entry)
            for entry in entries
            if entry.type != EntryType.SECTION_HEADER
        ]
    except BeancountParseError as exc:
        exc.path = path
        raise
    for directive in directives:
        logger.log(
            VERBOSE_LOG_LEVEL,
            "Collected %s directive at line %s",
            directive.type.value,
            directive.lineno,
        )
    return directives


def parse_file(path: pathlib.Path) -> list[Directive]:
    text = path.read_text()
    directives = parse_text(text, path=path)
    logger.debug("Parsed %s directives from %s", len(directives), path)
    return directives


def filter_transactions(directives: typing.Iterable[Directive]) -> list[Directive]:
    return [
        directive for directive in directives if directive.type == EntryType.TXN
    ]
