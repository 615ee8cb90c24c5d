from relay_core.api.server import main

main()
