from dslschema.cli.main import main

main()
