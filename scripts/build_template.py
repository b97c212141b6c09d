"""Build a blank A4 payslip template PDF that the renderer can stamp onto.

Usage:
    python scripts/build_template.py --output templates/payslip_template.pdf
"""

from __future__ import annotations

import argparse
from io import BytesIO
from pathlib import Path

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

COMPANY = "Company Name"

# (label, x, y-from-top)
LABELS: list[tuple[str, float, float]] = [
    ("Salary Slip for", 240, 172),
    ("Employee Name:", 40, 206),
    ("Employee Type:", 300, 206),
    ("Emp Code:", 470, 206),
    ("Designation:", 40, 227),
    ("Department:", 40, 248),
    ("No. of Days in Month:", 300, 248),
    ("Date of Joining:", 40, 272),
    ("Working Days:", 300, 271),
    ("Provident Fund:", 40, 293),
    ("ESIC No.:", 300, 293),
    ("Total Arrear Days:", 300, 315),
    ("LOP:", 450, 315),
    ("Bank Name:", 40, 336),
    ("Account No:", 180, 336),
    ("IFSC Code:", 310, 336),
    ("Branch Name:", 450, 336),
    ("UAN No:", 40, 357),
    ("PAN No:", 300, 357),
    ("Earnings", 40, 400),
    ("Amount (Rs.)", 250, 400),
    ("Deductions", 320, 400),
    ("Amount (Rs.)", 520, 400),
    ("Basic Salary", 40, 423),
    ("HRA", 40, 446),
    ("LTA Allowance", 40, 469),
    ("Special Allowance", 40, 492),
    ("Gross Earning", 40, 516),
    ("Professional Tax", 320, 423),
    ("TDS", 320, 446),
    ("Total Deductions", 320, 516),
    ("Net Pay", 40, 562),
    ("Total Pay", 40, 585),
    ("In Words:", 40, 608),
]


def build_template(output: Path | None = None) -> bytes:
    """Render the template and optionally write it to ``output``. Returns the PDF bytes."""
    width, height = A4
    buf = BytesIO()
    pdf = canvas.Canvas(buf, pagesize=A4, invariant=1)
    pdf.setTitle("Payslip Template")

    pdf.setFont("Helvetica-Bold", 14)
    pdf.drawCentredString(width / 2, height - 120, COMPANY)
    pdf.setFont("Helvetica", 9)
    for label, x, y in LABELS:
        pdf.drawString(x, height - y, label)
    for y in (190, 380, 530, 620):
        pdf.line(30, height - y, width - 20, height - y)

    pdf.showPage()
    pdf.save()
    data = buf.getvalue()
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(data)
    return data


def main() -> None:
    parser = argparse.ArgumentParser(description="Build the blank payslip template PDF")
    parser.add_argument("--output", default="templates/payslip_template.pdf",
                        help="Where to write the template")
    args = parser.parse_args()
    out = Path(args.output)
    data = build_template(out)
    print(f"Wrote {len(data)} bytes to {out}")


if __name__ == "__main__":
    main()
