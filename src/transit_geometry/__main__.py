from transit_geometry.server import main

main()
