from fastapi import APIRouter, Depends, status

from app.schemas.user import (
    ChangePhoneRequest,
    LoginRequest,
    RegisterRequest,
    ResendOtpRequest,
    VerifyOtpRequest,
)
from app.services.account_flow import AccountVerificationFlow, get_account_flow
from app.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post("/register")
def register(body: RegisterRequest, flow: AccountVerificationFlow = Depends(get_account_flow)):
    try:
        flow.register(
            phone_number=body.phone_number,
            full_name=body.full_name,
            birth_date=body.birth_date,
            password=body.password,
            user_age=body.user_age,
        )
        return create_response({"message": "Registration successful. OTP sent."}, status.HTTP_200_OK)
    except Exception as exc:
        return handle_exception(exc, "Registration failed")


@router.post("/resend-otp")
def resend_otp(body: ResendOtpRequest, flow: AccountVerificationFlow = Depends(get_account_flow)):
    try:
        flow.resend_otp(body.phone_number)
        return create_response({"message": "New OTP sent successfully"}, status.HTTP_200_OK)
    except Exception as exc:
        return handle_exception(exc, "Failed to resend OTP")


@router.post("/change-phone")
def change_phone(body: ChangePhoneRequest, flow: AccountVerificationFlow = Depends(get_account_flow)):
    try:
        flow.change_phone_number(body.old_phone_number, body.new_phone_number)
        return create_response({"message": "Phone number updated. New OTP sent."}, status.HTTP_200_OK)
    except Exception as exc:
        return handle_exception(exc, "Failed to change phone number")


@router.post("/verify-otp")
def verify_otp(body: VerifyOtpRequest, flow: AccountVerificationFlow = Depends(get_account_flow)):
    try:
        token = flow.verify_otp(body.phone_number, body.otp)
        return create_response({"token": token}, status.HTTP_200_OK)
    except Exception as exc:
        return handle_exception(exc, "Verification failed")


@router.post("/login")
def login(body: LoginRequest, flow: AccountVerificationFlow = Depends(get_account_flow)):
    try:
        result = flow.login(body.phone_number, body.password)
        return create_response(result, status.HTTP_200_OK)
    except Exception as exc:
        return handle_exception(exc, "Login failed")
