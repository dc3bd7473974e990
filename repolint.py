#!python3 -X utf8

from repolint.cli import run

if __name__ == '__main__':
    run()
