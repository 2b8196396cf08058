from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken, AuthenticationFailed


class JWTAuthenticationMiddleware:
    """Resolve the bearer token for non-DRF views.

    DRF views authenticate on their own; the GraphQL view only sees
    ``request.user`` so the token is resolved here for it.
    """

    jwt_paths = ('/graphql/',)

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if request.path.startswith(self.jwt_paths):
            raw_token = self.get_token_from_request(request)
            if raw_token is not None:
                auth = JWTAuthentication()
                try:
                    validated_token = auth.get_validated_token(raw_token)
                    request.user = auth.get_user(validated_token)
                except (InvalidToken, AuthenticationFailed):
                    # Leave the anonymous user in place
                    pass

        return self.get_response(request)

    def get_token_from_request(self, request):
        header = request.META.get('HTTP_AUTHORIZATION')
        if header and header.startswith('Bearer '):
            return header.split(' ')[1].encode('utf-8')
        return None
