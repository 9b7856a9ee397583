from recovery.cli import app

app(prog_name="recovery")
