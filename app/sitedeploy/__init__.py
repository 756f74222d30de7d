"""sitedeploy - Static-site deployment pipeline.

Cleans workspace artifacts, flags unused assets, optimizes images and
CSS, then builds and deploys the site through the provider CLI whose
marker file is present in the project.
"""

__version__ = "0.1.0"
