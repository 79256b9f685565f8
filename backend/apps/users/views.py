from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse

from apps.api.schemas import ErrorResponseSerializer
from apps.api.utils import error_from_tuple
from apps.common import get_logger
from .container import build_address_service, build_user_service
from .serializers import (
    AccountSerializer,
    AddressSerializer,
    AddressWriteSerializer,
    ProfileUpdateSerializer,
)

logger = get_logger(__name__).bind(component="users", layer="view")


@extend_schema(tags=["Account"])
class AccountView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_user_service()
    log = logger.bind(view="AccountView")

    @extend_schema(
        summary="Get account profile",
        responses={
            200: AccountSerializer,
            401: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        user_id = request.validated_user_id
        dto, error = self.service.get_profile(user_id)
        if error:
            return error_from_tuple(error)
        return Response(AccountSerializer(dto).data)

    @extend_schema(
        summary="Update account profile",
        description=(
            "Updates the display name. Supplying both currentPassword and "
            "newPassword also changes the password."
        ),
        request=ProfileUpdateSerializer,
        responses={
            200: AccountSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            401: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def put(self, request):
        user_id = request.validated_user_id
        self.log.info("Updating account profile", user_id=user_id)
        dto, error = self.service.update_profile(user_id, request.data)
        if error:
            return error_from_tuple(error)
        return Response(AccountSerializer(dto).data)


@extend_schema(tags=["Addresses"])
class AddressListView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_address_service()
    log = logger.bind(view="AddressListView")

    @extend_schema(
        summary="List delivery addresses",
        description="Default address first, then newest.",
        responses={
            200: AddressSerializer(many=True),
            401: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        user_id = request.validated_user_id
        self.log.debug("Listing addresses", user_id=user_id)
        addresses, error = self.service.list_addresses(user_id)
        if error:
            return error_from_tuple(error)
        return Response(AddressSerializer(addresses, many=True).data)

    @extend_schema(
        summary="Create delivery address",
        description=(
            "The first address of a user becomes the default. Creating an address "
            "with isDefault=true unmarks every other address."
        ),
        request=AddressWriteSerializer,
        responses={
            201: AddressSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            401: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        user_id = request.validated_user_id
        self.log.info("Creating address", user_id=user_id)
        dto, error = self.service.create_address(user_id, request.data)
        if error:
            return error_from_tuple(error)
        return Response(AddressSerializer(dto).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Addresses"])
class AddressDetailView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_address_service()
    log = logger.bind(view="AddressDetailView")

    @extend_schema(
        summary="Get delivery address",
        parameters=[OpenApiParameter("address_id", int, OpenApiParameter.PATH)],
        responses={
            200: AddressSerializer,
            401: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, address_id: int):
        dto, error = self.service.get_address(request.validated_user_id, address_id)
        if error:
            return error_from_tuple(error)
        return Response(AddressSerializer(dto).data)

    @extend_schema(
        summary="Update delivery address",
        parameters=[OpenApiParameter("address_id", int, OpenApiParameter.PATH)],
        request=AddressWriteSerializer,
        responses={
            200: AddressSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            401: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def patch(self, request, address_id: int):
        user_id = request.validated_user_id
        self.log.info("Patching address", user_id=user_id, address_id=address_id)
        dto, error = self.service.update_address(
            user_id, address_id, request.data, partial=True
        )
        if error:
            return error_from_tuple(error)
        return Response(AddressSerializer(dto).data)

    @extend_schema(
        summary="Replace delivery address",
        parameters=[OpenApiParameter("address_id", int, OpenApiParameter.PATH)],
        request=AddressWriteSerializer,
        responses={
            200: AddressSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            401: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def put(self, request, address_id: int):
        user_id = request.validated_user_id
        self.log.info("Replacing address", user_id=user_id, address_id=address_id)
        dto, error = self.service.update_address(
            user_id, address_id, request.data, partial=False
        )
        if error:
            return error_from_tuple(error)
        return Response(AddressSerializer(dto).data)

    @extend_schema(
        summary="Delete delivery address",
        description=(
            "Deleting the default address promotes the most recent remaining one. "
            "Addresses referenced by orders cannot be deleted."
        ),
        parameters=[OpenApiParameter("address_id", int, OpenApiParameter.PATH)],
        responses={
            204: None,
            401: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
            409: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def delete(self, request, address_id: int):
        user_id = request.validated_user_id
        self.log.info("Deleting address", user_id=user_id, address_id=address_id)
        _, error = self.service.delete_address(user_id, address_id)
        if error:
            return error_from_tuple(error)
        return Response(status=status.HTTP_204_NO_CONTENT)
