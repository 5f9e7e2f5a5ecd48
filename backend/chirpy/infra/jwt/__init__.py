from .flask_jwt_token_provider import FlaskJWTTokenProvider

__all__ = ["FlaskJWTTokenProvider"]
