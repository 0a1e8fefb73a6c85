from crate_release.cli.main import app

app(prog_name="crate-release")
