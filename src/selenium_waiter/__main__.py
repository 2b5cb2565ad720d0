from selenium_waiter.cli import main

main()
