from htmlpdf.cli import run

run()
