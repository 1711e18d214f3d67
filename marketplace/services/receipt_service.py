import os

from reportlab.pdfgen import canvas

from marketplace.schemas.checkout_schemas import Receipt


def receipt_path(receipt_dir: str, checkout_id: str) -> str:
    return os.path.join(receipt_dir, f"receipt_{checkout_id}.pdf")


def generate_receipt_pdf(receipt: Receipt, file_path: str) -> str:
    os.makedirs(os.path.dirname(file_path) or ".", exist_ok=True)

    c = canvas.Canvas(file_path)
    y = 780

    c.drawString(100, y, f"Receipt #{receipt.order_reference}")
    y -= 20
    c.drawString(100, y, f"Date: {receipt.created_at:%Y-%m-%d %H:%M}")
    y -= 20
    c.drawString(100, y, f"Billed to: {receipt.billing.full_name}")
    y -= 30

    for line in receipt.lines:
        if y < 80:
            c.showPage()
            y = 780
        c.drawString(
            100, y,
            f"{line.product_name} x{line.quantity}  ({line.store_name}, {line.payment_method})"
            f"  {line.amount}",
        )
        y -= 18

    y -= 12
    c.drawString(100, y, f"Total: {receipt.total}")
    c.save()

    return file_path
