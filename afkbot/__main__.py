from afkbot.cli import main

main()
