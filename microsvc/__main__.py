from microsvc.cli import main

main()
