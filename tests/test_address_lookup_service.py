import pytest
from unittest.mock import AsyncMock, MagicMock

from restaurant_map.clients import PlacesAPIError
from restaurant_map.console import OperatorConsole
from restaurant_map.csv_io import load_restaurants
from restaurant_map.lookup.address_lookup_service import AddressLookupService
from restaurant_map.models import PlaceCandidate, Restaurant


def place(n):
    return PlaceCandidate(id=f"id{n}", display_name=f"Place {n}", formatted_address=f"{n} Main St, Los Angeles, CA")


def scripted_console(*answers):
    """OperatorConsole fed by fixed answers; fails the test if it asks for more."""
    answers_iter = iter(answers)
    prompts = []
    output = []

    def fake_input(prompt):
        prompts.append(prompt)
        try:
            return next(answers_iter)
        except StopIteration:
            raise AssertionError(f"Unexpected prompt: {prompt!r}")

    console = OperatorConsole(input_fn=fake_input, output_fn=output.append)
    return console, prompts, output


def make_service(tmp_path, results=None, console=None, side_effect=None):
    client = MagicMock()
    client.search_text = AsyncMock(return_value=results or [], side_effect=side_effect)
    console = console or scripted_console()[0]
    service = AddressLookupService(tmp_path / "out.csv", client, console, cost_per_request=0.5)
    return service, client


def panda(address=""):
    return Restaurant(name="Panda Inn", neighborhood="Alhambra", cuisine="Chinese", price="$$", address=address)


@pytest.mark.asyncio
async def test_existing_address_is_never_searched(tmp_path):
    service, client = make_service(tmp_path)
    restaurants = [panda("111 E Main St")]

    results = await service.process_restaurants(restaurants)

    assert results == restaurants
    client.search_text.assert_not_called()
    assert service.request_count == 0


@pytest.mark.asyncio
async def test_single_result_is_auto_accepted_without_prompt(tmp_path):
    service, client = make_service(tmp_path, results=[place(1)])

    address = await service.lookup_address(panda())

    assert address == "1 Main St, Los Angeles, CA"
    client.search_text.assert_awaited_once_with("Panda Inn Alhambra Los Angeles, CA")
    assert service.request_count == 1


@pytest.mark.asyncio
async def test_zero_results_prompt_for_manual_address(tmp_path):
    console, prompts, _ = scripted_console("500 Typed Ave")
    service, _ = make_service(tmp_path, results=[], console=console)

    assert await service.lookup_address(panda()) == "500 Typed Ave"
    assert len(prompts) == 1


@pytest.mark.asyncio
async def test_request_failure_falls_back_to_operator_and_still_counts(tmp_path):
    console, _, output = scripted_console("")
    service, _ = make_service(tmp_path, console=console, side_effect=PlacesAPIError("boom", status=500))

    assert await service.lookup_address(panda()) == ""
    assert service.request_count == 1
    assert any("boom" in line for line in output)


@pytest.mark.asyncio
async def test_duplicate_records_share_one_search(tmp_path):
    service, client = make_service(tmp_path, results=[place(1)])
    restaurants = [panda(), panda()]

    results = await service.process_restaurants(restaurants)

    assert client.search_text.await_count == 1
    assert [r.address for r in results] == ["1 Main St, Los Angeles, CA"] * 2


@pytest.mark.asyncio
async def test_cached_skip_is_reused(tmp_path):
    console, prompts, _ = scripted_console("")
    service, client = make_service(tmp_path, results=[], console=console)

    results = await service.process_restaurants([panda(), panda()])

    assert client.search_text.await_count == 1
    assert len(prompts) == 1
    assert [r.address for r in results] == ["", ""]


@pytest.mark.asyncio
async def test_multiple_results_show_at_most_five_plus_skip_and_manual(tmp_path):
    console, prompts, output = scripted_console("8", "0", "x", "2")
    service, _ = make_service(tmp_path, results=[place(n) for n in range(1, 8)], console=console)

    address = await service.lookup_address(panda())

    assert address == "2 Main St, Los Angeles, CA"
    numbered = [line for line in output if line.strip()[:2] in {f"{n}." for n in range(1, 10)}]
    assert len(numbered) == 7
    assert "  6. Skip this restaurant" in output
    assert "  7. Enter address manually\n" in output
    assert not any("Place 6" in line for line in output)
    assert prompts == ["Select option (1-7): "] * 4


@pytest.mark.asyncio
async def test_multiple_results_skip_and_manual_options(tmp_path):
    console, _, _ = scripted_console("3")
    service, _ = make_service(tmp_path, results=[place(1), place(2)], console=console)
    assert await service.lookup_address(panda()) == ""

    console, prompts, _ = scripted_console("4", "9 Hand Typed Rd")
    service, _ = make_service(tmp_path, results=[place(1), place(2)], console=console)
    assert await service.lookup_address(panda()) == "9 Hand Typed Rd"
    assert prompts[-1] == "Enter address: "


@pytest.mark.asyncio
async def test_progress_saved_after_each_resolved_address(tmp_path):
    sqirl = Restaurant(name="Sqirl", neighborhood="Silver Lake", cuisine="Californian", price="")
    service, client = make_service(tmp_path)
    client.search_text.side_effect = [[place(1)], [place(2)]]
    saves = []
    original_save = service.save_progress

    def spy(restaurants):
        saves.append([r.address for r in restaurants])
        original_save(restaurants)

    service.save_progress = spy

    results = await service.process_restaurants([panda(), sqirl])

    assert saves == [["1 Main St, Los Angeles, CA", ""], ["1 Main St, Los Angeles, CA", "2 Main St, Los Angeles, CA"]]
    assert load_restaurants(tmp_path / "out.csv") == results


@pytest.mark.asyncio
async def test_skipped_record_is_not_flushed(tmp_path):
    console, _, _ = scripted_console("")
    service, _ = make_service(tmp_path, results=[], console=console)

    await service.process_restaurants([panda()])

    assert not (tmp_path / "out.csv").exists()


@pytest.mark.asyncio
async def test_order_preserved_and_summary(tmp_path):
    console, _, output = scripted_console()
    service, _ = make_service(tmp_path, results=[place(1)], console=console)
    kato = Restaurant(name="Kato", neighborhood="Hollywood", cuisine="Taiwanese", price="$$$$", address="777 S Alameda St")

    results = await service.process_restaurants([kato, panda()])

    assert [r.name for r in results] == ["Kato", "Panda Inn"]
    summary = service.summarize(results)
    assert summary.total == 2
    assert summary.with_address == 2
    assert summary.requests == 1
    assert summary.estimated_cost == pytest.approx(0.5)
    assert "Estimated cost: $0.50" in output
    assert any("Skipping 1 restaurants" in line for line in output)
