# awards/pdf.py
from django.http import HttpResponse
from django.template.loader import get_template
from django.utils import timezone


def render_certificate(request, template_name, context, filename_prefix="certificate"):
    """
    Render an HTML template to PDF with WeasyPrint.
    ?format=html returns the HTML itself (print preview).
    """
    html = get_template(template_name).render(context, request)

    if request.GET.get("format") == "html":
        return HttpResponse(html)

    # WeasyPrint pulls in native libraries; import only when a PDF is asked for
    from weasyprint import HTML

    pdf_file = HTML(string=html, base_url=request.build_absolute_uri()).write_pdf()
    response = HttpResponse(pdf_file, content_type="application/pdf")
    ts = timezone.now().strftime("%Y%m%d-%H%M%S")
    response["Content-Disposition"] = f'inline; filename="{filename_prefix}-{ts}.pdf"'
    return response
