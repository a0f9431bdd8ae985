from doc_library.cli import main

main()
