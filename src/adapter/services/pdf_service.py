"""ReportLab PDF Generation Service Implementation

Implements invoice rendering using ReportLab library.
"""

from io import BytesIO
from typing import List
from decimal import Decimal

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from src.app.services.pdf_service import PdfService
from src.domain.customer import Customer
from src.domain.invoice import Invoice
from src.domain.invoice_line import InvoiceLineItem

COLUMN_WIDTHS = [80 * mm, 25 * mm, 30 * mm, 35 * mm]


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService
    """

    def generate_invoice(
        self,
        invoice: Invoice,
        customer: Customer,
        lines: List[InvoiceLineItem],
        company_name: str,
        company_address: str,
        currency: str,
    ) -> bytes:
        """
        Render a customer invoice

        Returns:
            PDF document as bytes
        """
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=20 * mm,
            leftMargin=20 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
        )

        styles = getSampleStyleSheet()
        elements = []

        title_style = ParagraphStyle(
            "TitleStyle",
            parent=styles["Heading1"],
            fontSize=22,
            spaceAfter=10,
            textColor=colors.HexColor("#1F4E79"),
        )
        header_style = ParagraphStyle(
            "HeaderStyle",
            parent=styles["Normal"],
            fontSize=10,
            textColor=colors.HexColor("#7F8C8D"),
        )
        normal_style = ParagraphStyle(
            "NormalStyle",
            parent=styles["Normal"],
            fontSize=10,
        )
        bold_style = ParagraphStyle(
            "BoldStyle",
            parent=styles["Normal"],
            fontSize=10,
            fontName="Helvetica-Bold",
        )

        def money(amount: Decimal) -> str:
            return f"{currency} {amount:,.2f}"

        elements.append(Paragraph(company_name, title_style))
        elements.append(Paragraph(company_address, header_style))
        elements.append(Spacer(1, 8 * mm))

        invoice_info = [
            ["Invoice Number:", invoice.invoice_number],
            ["Invoice Date:", invoice.invoice_date.strftime("%Y-%m-%d")],
            ["Due Date:", invoice.due_date.strftime("%Y-%m-%d")],
            [
                "Billing Period:",
                f"{invoice.billing_period_start.strftime('%Y-%m-%d')} to "
                f"{invoice.billing_period_end.strftime('%Y-%m-%d')}",
            ],
            ["Status:", invoice.status.value.replace("_", " ").upper()],
        ]
        invoice_table = Table(invoice_info, colWidths=[40 * mm, 100 * mm])
        invoice_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, -1), colors.HexColor("#7F8C8D")),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(invoice_table)
        elements.append(Spacer(1, 8 * mm))

        # Bill to
        elements.append(Paragraph("Bill To:", bold_style))
        elements.append(Paragraph(f"{customer.full_name} ({customer.customer_code})", normal_style))
        address = ", ".join(
            part for part in (customer.address_line1, customer.address_line2, customer.city, customer.pincode)
            if part
        )
        elements.append(Paragraph(address, normal_style))
        elements.append(Paragraph(f"Phone: {customer.phone}", normal_style))
        elements.append(Spacer(1, 8 * mm))

        line_data = [["Description", "Quantity", "Unit Price", "Total"]]
        for line in lines:
            line_data.append(
                [
                    line.description,
                    f"{line.quantity:,.2f}".rstrip("0").rstrip("."),
                    money(line.unit_price),
                    money(line.line_total),
                ]
            )

        line_table = Table(line_data, colWidths=COLUMN_WIDTHS)
        line_table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#1F4E79")),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, 0), 10),
                    ("ALIGN", (0, 0), (-1, 0), "CENTER"),
                    ("FONTSIZE", (0, 1), (-1, -1), 9),
                    ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#BDC3C7")),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                    ("TOPPADDING", (0, 0), (-1, -1), 6),
                    (
                        "ROWBACKGROUNDS",
                        (0, 1),
                        (-1, -1),
                        [colors.white, colors.HexColor("#F8F9F9")],
                    ),
                ]
            )
        )
        elements.append(line_table)
        elements.append(Spacer(1, 5 * mm))

        totals = [
            ["", "", "Subtotal:", money(invoice.subtotal)],
            ["", "", "Tax:", money(invoice.tax_amount)],
            ["", "", "Discount:", f"- {money(invoice.discount_amount)}"],
            ["", "", "Total:", money(invoice.total_amount)],
            ["", "", "Paid:", money(invoice.paid_amount)],
            ["", "", "Balance Due:", money(invoice.balance_amount)],
        ]
        total_table = Table(totals, colWidths=COLUMN_WIDTHS)
        total_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (2, 0), (-1, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("ALIGN", (2, 0), (-1, -1), "RIGHT"),
                    ("LINEABOVE", (2, 3), (-1, 3), 1.5, colors.HexColor("#1F4E79")),
                    ("LINEABOVE", (2, 5), (-1, 5), 1.0, colors.HexColor("#1F4E79")),
                    ("TOPPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(total_table)

        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes
