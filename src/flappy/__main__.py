from flappy.main import main

main()
