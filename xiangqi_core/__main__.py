from xiangqi_core.cli import app

app(prog_name="xiangqi")
