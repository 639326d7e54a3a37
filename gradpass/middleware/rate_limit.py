from slowapi import Limiter
from slowapi.util import get_remote_address

# Codes are typed by hand at the door; throttling guesses keeps them unguessable
limiter = Limiter(key_func=get_remote_address)
