from stackcalc.main import main


main()
