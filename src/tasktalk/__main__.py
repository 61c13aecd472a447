from tasktalk.cli.main import main

main()
