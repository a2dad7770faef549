from speckeep.cli import main

main()
