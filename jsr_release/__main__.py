from jsr_release.cli.app import main

main()
