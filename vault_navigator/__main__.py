from vault_navigator.server import main

main()
