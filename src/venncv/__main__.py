from venncv.cli import cli

cli()
