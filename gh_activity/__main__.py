from gh_activity.cli import run

run()
