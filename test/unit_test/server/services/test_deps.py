"""Unit tests for the service dependency providers."""

from sassify.server.services import deps
from sassify.server.services.blog_generator import BlogGeneratorService
from sassify.server.services.stripe_webhook import StripeWebhookHandler


class TestSingletons:
    async def test_http_clients_are_shared_and_closed(self):
        deps.get_openai_service.cache_clear()
        deps.get_stripe_client.cache_clear()

        assert deps.get_openai_service() is deps.get_openai_service()
        assert deps.get_stripe_client() is deps.get_stripe_client()

        await deps.close_clients()

        assert deps.get_openai_service.cache_info().currsize == 0
        assert deps.get_stripe_client.cache_info().currsize == 0

    async def test_close_clients_without_clients(self):
        deps.get_openai_service.cache_clear()
        deps.get_stripe_client.cache_clear()

        await deps.close_clients()


class TestRequestScopedProviders:
    def test_repos_and_services_share_the_session(self, session, openai_service, stripe_client):
        repos = deps.get_repos(session)

        generator = deps.get_blog_generator(openai_service, repos)
        handler = deps.get_webhook_handler(repos, stripe_client)

        assert repos.blogs.session is session
        assert isinstance(generator, BlogGeneratorService)
        assert generator.blogs is repos.blogs
        assert isinstance(handler, StripeWebhookHandler)
        assert handler.stripe is stripe_client
