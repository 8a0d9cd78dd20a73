from taskmate.main import run

run()
