from .base import *
from .base import env

DEBUG = env.bool("DJANGO_DEBUG", True)
SECRET_KEY = env(
    "DJANGO_SECRET_KEY",
    default="c7kq0ZpXw2m9LbVt4RrE1sYdNf6uHgJo8aQxCzWv3KeTyPiUlMnB5DhGjF0sAq9R",
)
ALLOWED_HOSTS = ["localhost", "0.0.0.0", "127.0.0.1"]
