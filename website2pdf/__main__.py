from website2pdf.cli import cli

cli()
