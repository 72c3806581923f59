# ▶️ musicrecs/__main__.py
from musicrecs.cli.main import run

if __name__ == "__main__":
    run()
