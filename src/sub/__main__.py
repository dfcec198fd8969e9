from sub.cli import main

main()
