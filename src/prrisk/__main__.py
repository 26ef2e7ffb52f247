from prrisk.cli import app

app()
