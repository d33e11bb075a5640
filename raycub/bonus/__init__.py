"""Bonus edition: doors, sprites, minimap, fixed-step motion and mouse look."""