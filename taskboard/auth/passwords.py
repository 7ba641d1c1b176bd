import bcrypt

# bcrypt only looks at the first 72 bytes
def _encode(plain: str) -> bytes:
    return plain.encode("utf-8")[:72]

def hash_password(plain: str) -> str:
    return bcrypt.hashpw(_encode(plain), bcrypt.gensalt()).decode("utf-8")

def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_encode(plain), hashed.encode("utf-8"))
    except ValueError:
        return False
