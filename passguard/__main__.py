from passguard.main import main

main()
