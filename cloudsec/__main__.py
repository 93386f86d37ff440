from cloudsec.cli import run

run()
