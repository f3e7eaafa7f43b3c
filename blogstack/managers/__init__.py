from blogstack.managers.token_manager import create_access_token, decode_access_token

__all__ = ["create_access_token", "decode_access_token"]
