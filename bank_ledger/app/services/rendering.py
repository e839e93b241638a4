"""Statement renderers.

A renderer turns a ``StatementResponse`` into bytes and knows nothing about
how the statement was built. Register new formats in ``RENDERERS``.
"""
from __future__ import annotations

import csv
import io
from typing import Protocol
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..core.errors import UnsupportedFormatError
from ..models import StatementAccount, StatementResponse


class StatementRenderer(Protocol):
    media_type: str
    extension: str

    def render(self, statement: StatementResponse) -> bytes: ...


class JsonStatementRenderer:
    media_type = "application/json"
    extension = "json"

    def render(self, statement: StatementResponse) -> bytes:
        return statement.model_dump_json(indent=2, by_alias=True).encode("utf-8")


class CsvStatementRenderer:
    media_type = "text/csv"
    extension = "csv"

    headers = [
        "customer_id",
        "customer_name",
        "account_number",
        "account_type",
        "initial_balance",
        "date",
        "kind",
        "amount",
        "available_balance",
        "total_credits",
        "total_debits",
    ]

    def render(self, statement: StatementResponse) -> bytes:
        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=self.headers)
        writer.writeheader()

        for account in statement.accounts:
            base = {
                "customer_id": statement.customer.id,
                "customer_name": statement.customer.name,
                "account_number": account.number,
                "account_type": account.type.value,
                "initial_balance": account.initial_balance,
                "total_credits": account.totals.credits,
                "total_debits": account.totals.debits,
            }
            if not account.transactions:
                # Keep accounts without activity visible in the export.
                writer.writerow(base)
                continue
            for tx in account.transactions:
                writer.writerow(
                    {
                        **base,
                        "date": tx.date.isoformat(),
                        "kind": tx.kind.value,
                        "amount": tx.amount,
                        "available_balance": tx.available_balance,
                    }
                )

        content = output.getvalue()
        output.close()
        return content.encode("utf-8")


class PdfStatementRenderer:
    media_type = "application/pdf"
    extension = "pdf"

    columns = ["Date", "Kind", "Amount", "Balance"]

    def _account_table(self, account: StatementAccount) -> Table:
        rows = [self.columns]
        for tx in account.transactions:
            rows.append(
                [tx.date.isoformat(), tx.kind.value, f"{tx.amount:.2f}", f"{tx.available_balance:.2f}"]
            )
        if not account.transactions:
            rows.append(["No movements in period", "", "", ""])
        table = Table(rows, hAlign="LEFT", colWidths=[90, 70, 90, 90])
        table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("LINEBELOW", (0, 0), (-1, 0), 0.5, colors.black),
                    ("ALIGN", (2, 0), (-1, -1), "RIGHT"),
                ]
            )
        )
        return table

    def render(self, statement: StatementResponse) -> bytes:
        styles = getSampleStyleSheet()
        story = [
            Paragraph("ACCOUNT STATEMENT", styles["Title"]),
            Paragraph(
                f"Customer: {escape(statement.customer.name)} (ID {statement.customer.id})",
                styles["Normal"],
            ),
            Paragraph(
                f"Period: {statement.date_range.start.isoformat()} to "
                f"{statement.date_range.end.isoformat()}",
                styles["Normal"],
            ),
            Spacer(1, 12),
        ]
        for account in statement.accounts:
            story.extend(
                [
                    Paragraph(
                        f"ACCOUNT: {escape(account.number)} ({account.type.value})",
                        styles["Heading2"],
                    ),
                    Paragraph(f"Initial balance: {account.initial_balance:.2f}", styles["Normal"]),
                    Spacer(1, 6),
                    self._account_table(account),
                    Spacer(1, 6),
                    Paragraph(
                        f"Total credits: {account.totals.credits:.2f}    "
                        f"Total debits: {account.totals.debits:.2f}",
                        styles["Normal"],
                    ),
                    Spacer(1, 12),
                ]
            )

        buffer = io.BytesIO()
        document = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            title=f"Account statement {statement.customer.id}",
        )
        document.build(story)
        return buffer.getvalue()


RENDERERS: dict[str, StatementRenderer] = {
    "csv": CsvStatementRenderer(),
    "json": JsonStatementRenderer(),
    "pdf": PdfStatementRenderer(),
}


def get_renderer(fmt: str) -> StatementRenderer:
    try:
        return RENDERERS[fmt.lower()]
    except KeyError as exc:
        raise UnsupportedFormatError(
            f"Unsupported statement format {fmt!r}; expected one of {sorted(RENDERERS)}"
        ) from exc
