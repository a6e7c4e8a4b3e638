from unittest.mock import Mock

from google.api_core import exceptions as google_exceptions
from google.cloud import compute_v1

from gcp_inventory_exporter.cache import LookupCache, MachineTypeCache


def machine_types_client(*machine_types):
    client = Mock()
    client.list.return_value = list(machine_types)
    return client


def test_build_indexes_machine_types(test_logger, caplog):
    client = machine_types_client(
        compute_v1.MachineType(name='n1-standard-1', guest_cpus=1, memory_mb=3840),
        compute_v1.MachineType(name='e2-medium', guest_cpus=2, memory_mb=4096),
    )

    cache = MachineTypeCache.build(client, 'proj-a', 'us-central1-a', test_logger)

    client.list.assert_called_once_with(project='proj-a', zone='us-central1-a')
    assert len(cache) == 2
    assert 'e2-medium' in cache
    assert cache.get_cpu('n1-standard-1') == '1'
    assert cache.get_memory('n1-standard-1') == '3840'
    assert cache.get_cpu('e2-medium') == '2'
    assert 'Found 2 machine types for project proj-a and zone us-central1-a' in caplog.text


def test_missing_key_renders_empty():
    cache = MachineTypeCache.build(machine_types_client(), 'proj-a', 'us-central1-a')

    assert cache.get_cpu('n1-standard-1') == ''
    assert cache.get_memory('n1-standard-1') == ''


def test_build_failure_gives_empty_cache(test_logger, caplog):
    client = Mock()
    client.list.side_effect = google_exceptions.Forbidden('compute API disabled')

    cache = MachineTypeCache.build(client, 'proj-a', 'us-central1-a', test_logger)

    assert len(cache) == 0
    assert cache.get_cpu('n1-standard-1') == ''
    assert 'compute API disabled' in caplog.text


def test_lookup_cache_missing_attribute():
    cache = LookupCache({'key': {'present': 'value'}})

    assert cache.get('key', 'present') == 'value'
    assert cache.get('key', 'absent') == ''
    assert cache.get('other', 'present') == ''
