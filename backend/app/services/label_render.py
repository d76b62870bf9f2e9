"""Label output formats: QR preview PNG, printable PDF, and ZPL for network printers."""
import asyncio
import logging
from io import BytesIO

import qrcode
from reportlab.graphics import renderPDF
from reportlab.graphics.barcode.qr import QrCodeWidget
from reportlab.graphics.shapes import Drawing
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

logger = logging.getLogger(__name__)

# 62mm x 29mm landscape label
LABEL_WIDTH = 62 * mm
LABEL_HEIGHT = 29 * mm

# Same label in printer dots at 203 dpi
ZPL_WIDTH_DOTS = 496
ZPL_HEIGHT_DOTS = 232


def generate_qr_png(data: str, box_size: int = 6, border: int = 2) -> bytes:
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)

    buffer = BytesIO()
    img = qr.make_image(fill_color="black", back_color="white")
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def _fit(text: str, font: str, size: float, max_width: float) -> str:
    if stringWidth(text, font, size) <= max_width:
        return text
    while text and stringWidth(text + "...", font, size) > max_width:
        text = text[:-1]
    return text + "..."


def _draw_label(pdf: canvas.Canvas, qr_data: str, lines: list[str], footer: str | None) -> None:
    margin = 2 * mm
    footer_height = 5 * mm if footer else 0
    qr_size = LABEL_HEIGHT - 2 * margin - footer_height

    widget = QrCodeWidget(qr_data)
    x1, y1, x2, y2 = widget.getBounds()
    drawing = Drawing(qr_size, qr_size, transform=[qr_size / (x2 - x1), 0, 0, qr_size / (y2 - y1), 0, 0])
    drawing.add(widget)
    renderPDF.draw(drawing, pdf, margin, margin + footer_height)

    text_x = margin + qr_size + 2 * mm
    text_width = LABEL_WIDTH - text_x - margin
    y = LABEL_HEIGHT - margin - 3 * mm
    for i, line in enumerate(lines):
        font, size = ("Helvetica-Bold", 9) if i == 0 else ("Helvetica", 7)
        pdf.setFont(font, size)
        pdf.drawString(text_x, y, _fit(line, font, size, text_width))
        y -= size + 2

    if footer:
        pdf.setLineWidth(0.3)
        pdf.line(margin, margin + footer_height, LABEL_WIDTH - margin, margin + footer_height)
        pdf.setFont("Helvetica", 6)
        pdf.drawCentredString(LABEL_WIDTH / 2, margin + 1 * mm, _fit(footer, "Helvetica", 6, LABEL_WIDTH - 2 * margin))


def generate_label_pdf(qr_data: str, lines: list[str], footer: str | None = None, copies: int = 1) -> bytes:
    """One page per copy, each page sized to the physical label."""
    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=(LABEL_WIDTH, LABEL_HEIGHT))
    for _ in range(copies):
        _draw_label(pdf, qr_data, lines, footer)
        pdf.showPage()
    pdf.save()
    return buffer.getvalue()


def _zpl_text(text: str) -> str:
    # ^ and ~ start ZPL commands
    return text.replace("^", " ").replace("~", " ")


def generate_zpl(qr_data: str, lines: list[str], footer: str | None = None, copies: int = 1) -> str:
    """ZPL II for one label with a QR code on the left and text on the right."""
    zpl = "^XA\n"
    zpl += f"^PW{ZPL_WIDTH_DOTS}\n"
    zpl += f"^LL{ZPL_HEIGHT_DOTS}\n"
    zpl += "^CI28\n"

    zpl += f"^FO16,16^BQN,2,4^FDQA,{_zpl_text(qr_data)}^FS\n"

    y = 24
    for i, line in enumerate(lines):
        size = 28 if i == 0 else 22
        zpl += f"^FO200,{y}^A0N,{size},{size}^FB280,1,0,L^FD{_zpl_text(line)}^FS\n"
        y += size + 8

    if footer:
        zpl += f"^FO16,196^GB{ZPL_WIDTH_DOTS - 32},1,1^FS\n"
        zpl += f"^FO16,204^A0N,20,20^FB{ZPL_WIDTH_DOTS - 32},1,0,C^FD{_zpl_text(footer)}^FS\n"

    zpl += f"^PQ{copies}\n"
    zpl += "^XZ\n"
    return zpl


async def send_zpl(zpl: str, host: str, port: int, timeout: float = 10.0) -> bool:
    """Send ZPL to a network label printer over raw TCP. Returns True on success."""
    writer = None
    try:
        _, writer = await asyncio.wait_for(asyncio.open_connection(host, port), timeout)
        writer.write(zpl.encode("utf-8"))
        await asyncio.wait_for(writer.drain(), timeout)
        writer.close()
        await asyncio.wait_for(writer.wait_closed(), timeout)
    except (OSError, asyncio.TimeoutError) as e:
        logger.error("Failed to print to %s:%s: %s", host, port, e)
        return False
    finally:
        # close() is idempotent; this covers a drain that stalled or failed
        if writer is not None:
            writer.close()
    logger.info("ZPL sent to %s:%s", host, port)
    return True
