from repolint.cli import run

run()
