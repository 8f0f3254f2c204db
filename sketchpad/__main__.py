from sketchpad.main import main

main()
