from hexmetro.main import main

main()
