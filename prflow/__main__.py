from prflow.cli import main

main()
