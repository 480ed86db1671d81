from vale.cli import main

main()
