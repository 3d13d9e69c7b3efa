from speed_dial.cli import main

main()
