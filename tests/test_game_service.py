import pytest

from conftest import WORDS, CyclingChoice
from wordgame.config.game_settings import CELEBRATION_TEXT, MSG_NOT_IN_WORD_LIST
from wordgame.models.errors import GameNotOver, InvalidLength, NotInDictionary
from wordgame.services import game_service as game_service_module
from wordgame.services.game_service import GameService


@pytest.fixture
def events(game_service):
    received = []
    game_service.add_listener(lambda game_id, event, payload: received.append((game_id, event, payload)))
    return received


def press(game_service, game_id, keys):
    state = None
    for key in keys:
        state = game_service.press_key(game_id, key)
    return state


def test_unknown_game_returns_none(game_service):
    assert game_service.get_game_state("missing") is None
    assert game_service.press_key("missing", "A") is None
    assert game_service.reset_game("missing") is None
    assert game_service.delete_game("missing") is False


def test_press_key_returns_updated_state(game_service):
    game_id = game_service.create_new_game()
    state = press(game_service, game_id, "REA")

    assert state.current_guess == "REA"
    assert state.phase == "playing"


def test_rejection_message_clears_after_timer(game_service, recorder, events):
    game_id = game_service.create_new_game()
    press(game_service, game_id, "ZZZZZ")

    with pytest.raises(NotInDictionary):
        game_service.press_key(game_id, "Enter")

    assert game_service.get_game_state(game_id).message == MSG_NOT_IN_WORD_LIST

    recorder.run_all()

    state = game_service.get_game_state(game_id)
    assert state.message == ""
    assert state.current_guess == "ZZZZZ"
    assert (game_id, 'message_cleared', {'game_id': game_id}) in events


def test_newer_message_invalidates_older_clear(game_service, recorder, events):
    game_id = game_service.create_new_game()

    with pytest.raises(InvalidLength):
        game_service.press_key(game_id, "Enter")
    press(game_service, game_id, "ZZZZZ")
    with pytest.raises(NotInDictionary):
        game_service.press_key(game_id, "Enter")

    recorder.run_all()

    cleared = [e for e in events if e[1] == 'message_cleared']
    assert len(cleared) == 1


def test_successful_guess_cancels_pending_clear(game_service, recorder, events):
    game_id = game_service.create_new_game()

    with pytest.raises(InvalidLength):
        game_service.make_guess(game_id, "CRA")
    state = game_service.make_guess(game_id, "CRANE")

    recorder.run_all()

    assert state.won is True
    assert game_service.get_game_state(game_id).message == "🎉 You won!"
    assert not [e for e in events if e[1] == 'message_cleared']


def test_games_created_while_loading_start_when_words_arrive(timers):
    service = GameService(timers=timers, rng=CyclingChoice())
    received = []
    service.add_listener(lambda game_id, event, payload: received.append((game_id, event)))
    game_id = service.create_new_game()

    assert service.get_game_state(game_id).phase == "loading"
    assert service.press_key(game_id, "A").current_guess == ""

    service.set_word_list(WORDS)

    assert service.get_game_state(game_id).phase == "playing"
    assert (game_id, 'game_state_update') in received


def test_words_arriving_while_a_game_is_being_created_start_it(timers, monkeypatch):
    service = GameService(timers=timers, rng=CyclingChoice())

    class WordsArriveDuringInit(game_service_module.GameSession):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            service.set_word_list(WORDS)

    monkeypatch.setattr(game_service_module, "GameSession", WordsArriveDuringInit)
    game_id = service.create_new_game()

    state = service.get_game_state(game_id)
    assert state.phase == "playing"
    assert service.press_key(game_id, "C").current_guess == "C"


def test_load_words_falls_back_when_source_missing(timers, tmp_path):
    service = GameService(timers=timers)
    game_id = service.create_new_game()

    words = service.load_words(str(tmp_path / "missing.txt"), "REACT")

    assert words == ["REACT"]
    assert service.get_session(game_id).solution == "REACT"
    assert service.make_guess(game_id, "REACT").won is True


def test_reset_game_requires_game_over(game_service):
    game_id = game_service.create_new_game()
    with pytest.raises(GameNotOver):
        game_service.reset_game(game_id)


def test_reset_game_starts_new_word(game_service):
    game_id = game_service.create_new_game()
    game_service.make_guess(game_id, "CRANE")

    state = game_service.reset_game(game_id)

    assert state.phase == "playing"
    assert state.guesses == [None] * 6
    assert game_service.get_session(game_id).solution == "REACT"


def test_standard_scoring_rule_is_used_for_board(timers):
    service = GameService(word_list=["CRANE", "EERIE"], timers=timers,
                          scoring_rule="standard", rng=CyclingChoice())
    game_id = service.create_new_game()
    state = service.make_guess(game_id, "EERIE")

    assert [tile.status for tile in state.board[0]] == [
        "absent", "absent", "present", "absent", "correct"
    ]


@pytest.fixture
def celebration_service(timers):
    return GameService(word_list=WORDS, timers=timers, celebration_mode=True,
                       tile_delay=0, rng=CyclingChoice())


def test_celebration_reveals_sixty_tiles_then_proposal(celebration_service, recorder):
    received = []
    celebration_service.add_listener(lambda game_id, event, payload: received.append((event, payload)))
    game_id = celebration_service.create_new_game()

    state = celebration_service.make_guess(game_id, "CRANE")
    assert state.won is True
    assert state.celebration is True

    recorder.run_all()

    tiles = [payload for event, payload in received if event == 'tile_revealed']
    assert len(tiles) == 60
    assert "".join(tile['letter'] for tile in tiles) == CELEBRATION_TEXT
    assert received[-1][0] == 'proposal'
    assert celebration_service.get_game_state(game_id).revealed == list(CELEBRATION_TEXT)


def test_celebration_also_runs_after_a_loss(celebration_service, recorder):
    game_id = celebration_service.create_new_game()
    for word in ["REACT", "SLATE", "TRAIN", "HOUSE", "PLANT", "BRAIN"]:
        celebration_service.make_guess(game_id, word)

    recorder.run_all()

    state = celebration_service.get_game_state(game_id)
    assert state.phase == "lost"
    assert len(state.revealed) == 60


def test_reset_cancels_reveal_in_progress(celebration_service, recorder):
    received = []
    celebration_service.add_listener(lambda game_id, event, payload: received.append(event))
    game_id = celebration_service.create_new_game()
    celebration_service.make_guess(game_id, "CRANE")

    celebration_service.reset_game(game_id)
    recorder.run_all()

    assert 'tile_revealed' not in received
    assert celebration_service.get_game_state(game_id).revealed == []


def test_proposal_answer_does_not_touch_game(celebration_service, recorder):
    received = []
    celebration_service.add_listener(lambda game_id, event, payload: received.append((event, payload)))
    game_id = celebration_service.create_new_game()

    assert celebration_service.answer_proposal(game_id, "yes") is None

    celebration_service.make_guess(game_id, "CRANE")
    recorder.run_all()
    before = celebration_service.get_game_state(game_id)

    assert celebration_service.answer_proposal(game_id, "yes") is True
    assert ('celebration', {'accepted': True}) in received
    assert celebration_service.get_game_state(game_id).guesses == before.guesses


def test_proposal_answer_waits_for_the_reveal_to_finish(celebration_service, recorder):
    received = []
    celebration_service.add_listener(lambda game_id, event, payload: received.append(event))
    game_id = celebration_service.create_new_game()
    celebration_service.make_guess(game_id, "CRANE")

    assert celebration_service.answer_proposal(game_id, "yes") is None
    assert 'celebration' not in received

    recorder.run_all()
    assert celebration_service.answer_proposal(game_id, "no") is False


def test_reset_closes_the_proposal(celebration_service, recorder):
    game_id = celebration_service.create_new_game()
    celebration_service.make_guess(game_id, "CRANE")
    recorder.run_all()

    celebration_service.reset_game(game_id)
    for word in ["CRANE", "SLATE", "TRAIN", "HOUSE", "PLANT", "BRAIN"]:
        celebration_service.make_guess(game_id, word)

    assert celebration_service.get_game_state(game_id).game_over is True
    assert celebration_service.answer_proposal(game_id, "yes") is None


def test_proposal_answer_ignored_outside_celebration_mode(game_service):
    game_id = game_service.create_new_game()
    game_service.make_guess(game_id, "CRANE")
    assert game_service.answer_proposal(game_id, "yes") is None


def test_delete_game(game_service):
    game_id = game_service.create_new_game()
    assert game_service.delete_game(game_id) is True
    assert game_service.get_game_state(game_id) is None


def test_malformed_word_list_is_refused(timers):
    with pytest.raises(ValueError):
        GameService(word_list=["abc"], timers=timers)
    with pytest.raises(ValueError):
        GameService(timers=timers).set_word_list(["CRANE", "crane"])
