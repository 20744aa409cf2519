def new_game(client):
    response = client.post('/api/new_game')
    assert response.status_code == 200
    return response.get_json()


def press(client, game_id, key):
    return client.post(f'/api/game/{game_id}/key', json={'key': key})


def test_new_game_returns_state_and_keyboard(client):
    data = new_game(client)

    assert data['success'] is True
    assert data['state']['phase'] == 'playing'
    assert data['state']['answer'] is None
    assert data['keyboard'][2][0] == 'ENTER'
    assert len(data['state']['board']) == 6


def test_get_state_unknown_game_is_404(client):
    response = client.get('/api/game/unknown/state')

    assert response.status_code == 404
    assert response.get_json() == {'success': False, 'error': 'Game not found'}


def test_key_presses_build_the_guess(client):
    game_id = new_game(client)['game_id']
    for key in 'rea':
        press(client, game_id, key)

    state = client.get(f'/api/game/{game_id}/state').get_json()['state']
    assert state['current_guess'] == 'REA'

    state = press(client, game_id, 'Backspace').get_json()['state']
    assert state['current_guess'] == 'RE'


def test_key_requires_body(client):
    game_id = new_game(client)['game_id']
    response = client.post(f'/api/game/{game_id}/key', json={})

    assert response.status_code == 400
    assert response.get_json()['error'] == 'Key is required'


def test_enter_with_short_word_is_rejected(client):
    game_id = new_game(client)['game_id']
    press(client, game_id, 'C')
    response = press(client, game_id, 'Enter')

    data = response.get_json()
    assert response.status_code == 400
    assert data['error'] == 'Word must be 5 letters'
    assert data['state']['current_row'] == 0
    assert data['state']['current_guess'] == 'C'


def test_guess_not_in_word_list_is_rejected(client):
    game_id = new_game(client)['game_id']
    response = client.post(f'/api/game/{game_id}/guess', json={'guess': 'zzzzz'})

    assert response.status_code == 400
    assert response.get_json()['error'] == 'Not in word list'


def test_guess_scores_row_and_keyboard(client):
    game_id = new_game(client)['game_id']
    response = client.post(f'/api/game/{game_id}/guess', json={'guess': 'react'})

    state = response.get_json()['state']
    assert response.status_code == 200
    assert state['current_row'] == 1
    assert [tile['status'] for tile in state['board'][0]] == [
        'present', 'present', 'correct', 'present', 'absent'
    ]
    assert state['keyboard']['T'] == 'absent'


def test_winning_guess_reveals_answer_and_reset_starts_over(client):
    game_id = new_game(client)['game_id']

    conflict = client.post(f'/api/game/{game_id}/reset')
    assert conflict.status_code == 409

    state = client.post(f'/api/game/{game_id}/guess', json={'guess': 'CRANE'}).get_json()['state']
    assert state['won'] is True
    assert state['phase'] == 'won'
    assert state['answer'] == 'CRANE'
    assert state['message'] == '🎉 You won!'

    state = client.post(f'/api/game/{game_id}/reset').get_json()['state']
    assert state['phase'] == 'playing'
    assert state['guesses'] == [None] * 6
    assert state['answer'] is None


def test_delete_game(client):
    game_id = new_game(client)['game_id']

    assert client.delete(f'/api/game/{game_id}').get_json() == {'success': True}
    assert client.get(f'/api/game/{game_id}/state').status_code == 404


def test_health(client):
    new_game(client)
    data = client.get('/api/health').get_json()

    assert data['status'] == 'healthy'
    assert data['active_games'] >= 1
    assert data['words_loaded'] == 8


def test_word_list_is_served_as_static_asset(client):
    response = client.get('/static/words.txt')

    assert response.status_code == 200
    assert b'REACT' in response.data
    response.close()
