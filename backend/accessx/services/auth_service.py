"""Authentication service for instructor accounts."""
from flask_jwt_extended import create_access_token
from sqlalchemy.exc import IntegrityError
from accessx import db
from accessx.errors import AuthenticationFailed, ValidationError
from accessx.models.instructor import Instructor
from accessx.services.proof_service import normalize_address
from accessx.utils.validators import Validator

class AuthService:
    @staticmethod
    def register(email: str, password: str, wallet_address: str) -> dict:
        """Register a new instructor."""
        if not all([email, password, wallet_address]):
            raise ValidationError("Email, password and wallet address are required")
        Validator.require_strings(
            {"email": email, "password": password, "walletAddress": wallet_address},
            ["email", "password", "walletAddress"]
        )

        email = email.lower().strip()
        if not Validator.validate_email(email):
            raise ValidationError("Invalid email format")

        password_errors = Validator.validate_password(password)
        if password_errors:
            raise ValidationError(password_errors[0])

        if not Validator.validate_wallet_address(wallet_address):
            raise ValidationError("Invalid wallet address")
        wallet = normalize_address(wallet_address)

        if Instructor.query.filter(
            (Instructor.email == email) | (Instructor.wallet_address == wallet)
        ).first():
            raise ValidationError("Email or wallet already registered")

        instructor = Instructor(email=email, wallet_address=wallet)
        instructor.set_password(password)
        try:
            instructor.save()
        except IntegrityError:
            db.session.rollback()
            raise ValidationError("Email or wallet already registered")

        return instructor.to_dict()

    @staticmethod
    def login(email: str, password: str) -> dict:
        """Authenticate an instructor and return an access token."""
        if not email or not password:
            raise ValidationError("Email and password are required")
        Validator.require_strings({"email": email, "password": password}, ["email", "password"])

        instructor = Instructor.query.filter_by(email=email.lower().strip()).first()
        if not instructor or not instructor.check_password(password):
            raise AuthenticationFailed()

        # Sessions are owned by wallet, so the wallet is the token identity
        access_token = create_access_token(identity=instructor.wallet_address)

        return {
            "access_token": access_token,
            "instructor": instructor.to_dict()
        }

    @staticmethod
    def get_by_wallet(wallet_address: str) -> Instructor:
        return Instructor.query.filter_by(wallet_address=normalize_address(wallet_address)).first()
