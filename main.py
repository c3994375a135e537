"""
Homing Flock
============

Real-time two-group flocking simulation. Each rendered frame advances the
flock by one tick; group A ships face outward from the origin, group B
ships face along their heading.

Close the window to quit.
"""

from core import Application
from flocking import Simulation


def main():
    app = Application(Simulation())
    app.run()


if __name__ == "__main__":
    main()
