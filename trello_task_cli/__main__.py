from trello_task_cli.cli import main

main()
