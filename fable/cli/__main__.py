from fable.cli.repl import main

main()
