"""Tests pour le modele de configuration."""

import dataclasses
from ipaddress import IPv4Address
from unittest.mock import MagicMock

import pytest

from hostnet_config.errors import ConfigurationError, DhcpConfigurationError
from hostnet_config.logging import Logger
from hostnet_config.network import config as config_module
from hostnet_config.network.config import (
    DEFAULT_CONFIGURATION,
    Configuration,
    DhcpConfiguration,
    Resolver,
)
from hostnet_config.network.dns_forward import (
    NO_DNS_SERVERS,
    DnsForwarderConfig,
)


@pytest.fixture
def logger() -> MagicMock:
    """Logger factice."""
    return MagicMock(spec=Logger)


class TestResolver:
    """Tests pour Resolver."""

    def test_libelles(self) -> None:
        """Libelles de diagnostic."""
        assert Resolver.HOST.label == "Host"
        assert Resolver.UPSTREAM.label == "Upstream"

    def test_enum_fermee(self) -> None:
        """Deux strategies seulement."""
        assert set(Resolver) == {Resolver.HOST, Resolver.UPSTREAM}


class TestDhcpConfiguration:
    """Tests pour DhcpConfiguration."""

    def test_search_domains_seuls(self, logger) -> None:
        """searchDomains present, domainName absent."""
        result = DhcpConfiguration.from_string(
            '{"searchDomains":["a.com","b.com"]}', logger
        )
        assert result == DhcpConfiguration(
            search_domains=("a.com", "b.com"), domain_name=None
        )
        logger.log_error.assert_not_called()

    def test_domain_name_seul(self, logger) -> None:
        """domainName present, searchDomains absent."""
        result = DhcpConfiguration.from_string(
            '{"domainName": "example.com"}', logger
        )
        assert result is not None
        assert result.search_domains == ()
        assert result.domain_name == "example.com"

    def test_objet_vide(self, logger) -> None:
        """Objet vide : valeurs par defaut."""
        assert DhcpConfiguration.from_string("{}", logger) == (
            DhcpConfiguration()
        )

    def test_cles_inconnues_ignorees(self, logger) -> None:
        """Les cles inconnues sont ignorees."""
        result = DhcpConfiguration.from_string(
            '{"domainName": "x.org", "leaseTime": 3600}', logger
        )
        assert result == DhcpConfiguration(domain_name="x.org")

    def test_json_invalide(self, logger) -> None:
        """Texte non JSON : None et log contenant le texte."""
        assert DhcpConfiguration.from_string("not json", logger) is None
        logger.log_error.assert_called_once()
        assert "not json" in logger.log_error.call_args[0][0]

    def test_json_non_objet(self, logger) -> None:
        """Document JSON qui n'est pas un objet : None."""
        assert DhcpConfiguration.from_string('"not json"', logger) is None
        assert '"not json"' in logger.log_error.call_args[0][0]

    def test_type_incorrect_propage(self, logger) -> None:
        """Cle presente avec un mauvais type : exception propagee."""
        with pytest.raises(DhcpConfigurationError):
            DhcpConfiguration.from_string('{"searchDomains": "a.com"}', logger)

    def test_domain_name_mal_type(self, logger) -> None:
        """domainName non chaine : exception propagee."""
        with pytest.raises(ConfigurationError):
            DhcpConfiguration.from_string('{"domainName": 42}', logger)

    def test_domain_name_null(self, logger) -> None:
        """domainName present mais null : exception propagee."""
        with pytest.raises(DhcpConfigurationError):
            DhcpConfiguration.from_string('{"domainName": null}', logger)

    def test_imbrication_excessive(self, logger) -> None:
        """JSON trop imbrique : None et erreur journalisee."""
        text = '{"x":' + "[" * 100000 + "]" * 100000 + "}"
        assert DhcpConfiguration.from_string(text, logger) is None
        logger.log_error.assert_called_once()

    def test_liste_figee(self) -> None:
        """Une liste passee au constructeur devient un tuple."""
        dhcp = DhcpConfiguration(search_domains=["a.com"])
        assert dhcp.search_domains == ("a.com",)

    def test_to_string(self) -> None:
        """Rendu de diagnostic."""
        dhcp = DhcpConfiguration(
            search_domains=("a.com", "b.com"), domain_name="a.com"
        )
        assert dhcp.to_string() == (
            "{ searchDomains = a.com, b.com; domainName = a.com }"
        )

    def test_to_string_sans_domaine(self) -> None:
        """domainName absent rendu "None"."""
        assert "domainName = None" in DhcpConfiguration().to_string()


class TestConfigurationDefaults:
    """Tests pour l'instance par defaut."""

    def test_valeurs(self) -> None:
        """Valeurs canoniques par defaut."""
        config = Configuration.default()
        assert config is DEFAULT_CONFIGURATION
        assert config.gateway_ip == IPv4Address("192.168.65.1")
        assert config.lowest_ip == IPv4Address("192.168.65.2")
        assert config.highest_ip == IPv4Address("192.168.65.254")
        assert config.extra_dns == ()
        assert config.mtu == 1500
        assert config.port_max_idle_time == 300
        assert config.server_macaddr == "f6:16:36:bc:f9:c6"
        assert config.host_names == ("vpnkit.host",)
        assert config.resolver is Resolver.HOST
        assert config.dns == NO_DNS_SERVERS

    def test_optionnels_absents(self) -> None:
        """Tous les optionnels valent None ou vide."""
        config = Configuration()
        for name in (
            "max_connections", "dns_path", "domain", "dhcp_json_path",
            "dhcp_configuration", "http_intercept", "http_intercept_path",
        ):
            assert getattr(config, name) is None
        assert config.allowed_bind_addresses == ()

    def test_dns_vide(self) -> None:
        """Forwarder DNS sans serveur ni recherche ni seuil."""
        dns = Configuration().dns
        assert dns.servers == ()
        assert dns.search == ()
        assert dns.assume_offline_after_drops is None

    def test_domaine_par_defaut(self) -> None:
        """Domaine local par defaut."""
        assert config_module.DEFAULT_DOMAIN == "localdomain"


class TestConfiguration:
    """Tests pour Configuration."""

    def test_frozen(self) -> None:
        """Modification leve FrozenInstanceError."""
        config = Configuration()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.mtu = 9000  # type: ignore[misc]

    def test_replace(self) -> None:
        """Une mise a jour produit une nouvelle instance."""
        updated = dataclasses.replace(DEFAULT_CONFIGURATION, mtu=9000)
        assert updated.mtu == 9000
        assert DEFAULT_CONFIGURATION.mtu == 1500

    def test_sequences_figees(self) -> None:
        """Les listes sont converties en tuples."""
        config = Configuration(
            extra_dns=[IPv4Address("1.1.1.1")],
            host_names=["a.host", "b.host"],
        )
        assert config.extra_dns == (IPv4Address("1.1.1.1"),)
        assert config.host_names == ("a.host", "b.host")

    def test_mac_invalide(self) -> None:
        """Adresse MAC invalide leve ValueError."""
        with pytest.raises(ValueError):
            Configuration(server_macaddr="not-a-mac")


class TestConfigurationToString:
    """Tests pour Configuration.to_string."""

    def test_defaut(self) -> None:
        """Optionnels rendus "None", mtu rendu 1500."""
        text = Configuration().to_string()
        assert "max_connections = None" in text
        assert "dns_path = None" in text
        assert "domain = None" in text
        assert "dhcp_json_path = None" in text
        assert "dhcp_configuration = None" in text
        assert "http_intercept = None" in text
        assert "http_intercept_path = None" in text
        assert "mtu = 1500" in text
        assert "resolver = Host" in text
        assert "server_macaddr = f6:16:36:bc:f9:c6" in text
        assert "host_names = vpnkit.host" in text

    def test_tous_les_champs(self) -> None:
        """Chaque champ apparait dans le rendu."""
        text = Configuration().to_string()
        for f in dataclasses.fields(Configuration):
            assert f"{f.name} = " in text

    def test_valeurs_renseignees(self) -> None:
        """Sequences jointes dans l'ordre, optionnels deballes."""
        config = Configuration(
            max_connections=10,
            domain="local",
            extra_dns=[IPv4Address("9.9.9.9"), IPv4Address("1.1.1.1")],
            dhcp_configuration=DhcpConfiguration(("a.com",), None),
            http_intercept={"exclude": ["*.local"]},
            dns=DnsForwarderConfig(search=("corp",)),
        )
        text = config.to_string()
        assert "max_connections = 10" in text
        assert "domain = local" in text
        assert "extra_dns = 9.9.9.9, 1.1.1.1" in text
        assert "searchDomains = a.com" in text
        assert 'http_intercept = {"exclude": ["*.local"]}' in text
        assert "search = corp" in text

    def test_pas_d_aller_retour(self) -> None:
        """Le rendu n'est jamais relu : aucun parseur inverse."""
        assert not hasattr(Configuration, "from_string")
        assert not hasattr(Configuration, "of_string")
