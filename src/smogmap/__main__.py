from smogmap.cli import cli

cli()
