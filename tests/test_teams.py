"""Team registry endpoints and the delete cascade."""

from league_api.extensions import db
from league_api.models import AuditLog, Player, Schedule, Team
from league_api.services.teams import team_service


class TestCreateTeam:

    def test_creator_becomes_manager_and_roster_grows(self, client, manager, manager_headers, create_team):
        team = create_team(manager_headers)
        assert team['manager']['id'] == manager
        assert team['players'] == []
        assert team['schedule'] == []

        response = client.post(f"/teams/{team['id']}/players", json={
            'first_name': 'A', 'last_name': 'B', 'player_number': 7, 'position': 'Forward',
        }, headers=manager_headers)
        assert response.status_code == 201
        player = response.get_json()['player']
        assert player['team']['id'] == team['id']

        fetched = client.get(f"/teams/{team['id']}").get_json()['team']
        assert len(fetched['players']) == 1
        assert fetched['players'][0]['id'] == player['id']

    def test_requires_token(self, client):
        response = client.post('/teams', json={'name': 'Hawks'})
        assert response.status_code == 401

    def test_missing_fields(self, client, manager_headers):
        response = client.post('/teams', json={'name': 'Hawks', 'city': 'Metro'}, headers=manager_headers)
        assert response.status_code == 400
        assert response.get_json() == {'error': 'Stadium is required'}

    def test_unknown_sport(self, client, manager_headers):
        response = client.post('/teams', json={
            'name': 'Hawks', 'city': 'Metro', 'stadium': 'Metro Field', 'sport': 'Cricket',
        }, headers=manager_headers)
        assert response.status_code == 400

    def test_optional_fields_are_validated(self, client, manager_headers):
        base = {'name': 'Hawks', 'city': 'Metro', 'stadium': 'Metro Field', 'sport': 'Soccer'}
        assert client.post('/teams', json={**base, 'team_type': 'Semi-pro'}, headers=manager_headers).status_code == 400
        assert client.post('/teams', json={**base, 'stadium_capacity': -5}, headers=manager_headers).status_code == 400

    def test_capacity_has_an_upper_bound(self, client, manager_headers):
        response = client.post('/teams', json={
            'name': 'Hawks', 'city': 'Metro', 'stadium': 'Metro Field', 'sport': 'Soccer', 'stadium_capacity': 10**20,
        }, headers=manager_headers)
        assert response.status_code == 400
        assert response.get_json() == {'error': 'Stadium capacity must be between 0 and 1000000'}

    def test_optional_fields_are_stored(self, manager_headers, create_team):
        team = create_team(manager_headers, team_type='College', stadium_capacity=12000)
        assert team['team_type'] == 'College'
        assert team['stadium_capacity'] == 12000

    def test_duplicate_name(self, client, manager_headers, rival_headers, create_team):
        create_team(manager_headers)
        response = client.post('/teams', json={
            'name': 'Hawks', 'city': 'Elsewhere', 'stadium': 'Other Field', 'sport': 'Hockey',
        }, headers=rival_headers)
        assert response.status_code == 409

    def test_name_race_is_a_conflict(self, client, monkeypatch, manager_headers, rival_headers, create_team):
        create_team(manager_headers)
        # another writer commits the same name after the lookup ran
        monkeypatch.setattr(team_service, '_name_taken', lambda *args, **kwargs: False)
        response = client.post('/teams', json={
            'name': 'Hawks', 'city': 'Elsewhere', 'stadium': 'Other Field', 'sport': 'Hockey',
        }, headers=rival_headers)
        assert response.status_code == 409
        assert response.get_json() == {'error': 'A team with this name already exists'}
        assert client.get('/teams').get_json()['pagination']['total'] == 1


class TestReadTeams:

    def test_get_unknown_team(self, client):
        response = client.get('/teams/does-not-exist')
        assert response.status_code == 404
        assert response.get_json() == {'error': 'Team not found'}

    def test_list_search_and_pagination(self, client, manager_headers, create_team):
        create_team(manager_headers, name='Hawks', city='Metro')
        create_team(manager_headers, name='Rovers', city='Harbor City')
        create_team(manager_headers, name='Metro Miners', city='Ridgeview')

        response = client.get('/teams?search=metro')
        assert response.status_code == 200
        names = [t['name'] for t in response.get_json()['items']]
        assert names == ['Hawks', 'Metro Miners']

        page = client.get('/teams?limit=2&page=2').get_json()
        assert [t['name'] for t in page['items']] == ['Rovers']
        assert page['pagination'] == {'page': 2, 'limit': 2, 'total': 3, 'total_pages': 2}

    def test_empty_listing_is_not_found(self, client):
        response = client.get('/teams')
        assert response.status_code == 404
        assert response.get_json() == {'error': 'No teams found.'}

    def test_empty_listing_can_be_an_empty_page(self, app, client):
        app.config['EMPTY_RESULTS_NOT_FOUND'] = False
        response = client.get('/teams')
        assert response.status_code == 200
        assert response.get_json()['items'] == []

    def test_bad_page_argument(self, client):
        assert client.get('/teams?page=zero').status_code == 400
        assert client.get('/teams?limit=0').status_code == 400


class TestUpdateTeam:

    def test_manager_updates_partially(self, client, manager_headers, create_team):
        team = create_team(manager_headers)
        response = client.put(f"/teams/{team['id']}", json={'city': 'New Metro'}, headers=manager_headers)
        assert response.status_code == 200
        updated = response.get_json()['team']
        assert updated['city'] == 'New Metro'
        assert updated['name'] == 'Hawks'

    def test_non_manager_is_forbidden(self, client, manager_headers, rival_headers, create_team):
        team = create_team(manager_headers)
        response = client.put(f"/teams/{team['id']}", json={'city': 'Stolen'}, headers=rival_headers)
        assert response.status_code == 403

    def test_admin_must_use_admin_endpoint(self, client, manager_headers, admin_headers, create_team):
        team = create_team(manager_headers)
        assert client.put(f"/teams/{team['id']}", json={'city': 'X'}, headers=admin_headers).status_code == 403

        response = client.put(f"/users/teams/{team['id']}/admin", json={'city': 'X'}, headers=admin_headers)
        assert response.status_code == 200
        assert response.get_json()['team']['city'] == 'X'

    def test_admin_endpoint_rejects_managers(self, client, manager_headers, create_team):
        team = create_team(manager_headers)
        response = client.put(f"/users/teams/{team['id']}/admin", json={'city': 'X'}, headers=manager_headers)
        assert response.status_code == 403

    def test_owner_endpoint_under_users(self, client, manager_headers, rival_headers, create_team):
        team = create_team(manager_headers)
        assert client.put(f"/users/teams/{team['id']}", json={'stadium': 'New Field'}, headers=manager_headers).status_code == 200
        assert client.put(f"/users/teams/{team['id']}", json={'stadium': 'Nope'}, headers=rival_headers).status_code == 403

    def test_manager_cannot_be_reassigned(self, client, manager, manager_headers, rival, create_team):
        team = create_team(manager_headers)
        response = client.put(f"/teams/{team['id']}", json={'manager': rival, 'manager_id': rival}, headers=manager_headers)
        assert response.status_code == 200
        assert response.get_json()['team']['manager']['id'] == manager

    def test_rename_conflict(self, client, manager_headers, create_team):
        create_team(manager_headers, name='Hawks')
        rovers = create_team(manager_headers, name='Rovers')
        response = client.put(f"/teams/{rovers['id']}", json={'name': 'Hawks'}, headers=manager_headers)
        assert response.status_code == 409

    def test_blank_required_field(self, client, manager_headers, create_team):
        team = create_team(manager_headers)
        response = client.put(f"/teams/{team['id']}", json={'city': '  '}, headers=manager_headers)
        assert response.status_code == 400

    def test_sport_change_must_fit_roster(self, client, manager_headers, create_team, add_player):
        team = create_team(manager_headers)
        add_player(manager_headers, team['id'], 9, position='Forward')

        response = client.put(f"/teams/{team['id']}", json={'sport': 'Baseball'}, headers=manager_headers)
        assert response.status_code == 400

        empty = create_team(manager_headers, name='Rovers')
        response = client.put(f"/teams/{empty['id']}", json={'sport': 'Baseball'}, headers=manager_headers)
        assert response.status_code == 200
        assert response.get_json()['team']['sport'] == 'Baseball'

    def test_team_without_manager_is_locked(self, app, client, manager_headers, create_team):
        team = create_team(manager_headers)
        with app.app_context():
            db.session.get(Team, team['id']).manager_id = None
            db.session.commit()

        response = client.put(f"/teams/{team['id']}", json={'city': 'X'}, headers=manager_headers)
        assert response.status_code == 403

    def test_unknown_team(self, client, manager_headers):
        assert client.put('/teams/missing', json={'city': 'X'}, headers=manager_headers).status_code == 404


class TestAdminCreate:

    def test_admin_creates_team(self, client, admin, admin_headers):
        response = client.post('/users/teams', json={
            'name': 'Comets', 'city': 'Lakeside', 'stadium': 'Lakeside Arena', 'sport': 'Basketball',
        }, headers=admin_headers)
        assert response.status_code == 201
        assert response.get_json()['team']['manager']['id'] == admin

    def test_non_admin_is_forbidden(self, client, manager_headers):
        response = client.post('/users/teams', json={
            'name': 'Comets', 'city': 'Lakeside', 'stadium': 'Lakeside Arena', 'sport': 'Basketball',
        }, headers=manager_headers)
        assert response.status_code == 403

    def test_requires_token(self, client):
        assert client.post('/users/teams', json={}).status_code == 401


class TestDeleteTeam:

    def test_delete_frees_players(self, app, client, manager_headers, create_team, add_player):
        team = create_team(manager_headers)
        player_ids = [add_player(manager_headers, team['id'], n)['id'] for n in (1, 2, 3)]

        response = client.delete(f"/teams/{team['id']}", headers=manager_headers)
        assert response.status_code == 200
        body = response.get_json()
        assert body['freed_players'] == 3
        assert body['team']['name'] == 'Hawks'

        for player_id in player_ids:
            player = client.get(f'/players/{player_id}').get_json()['player']
            assert player['team'] is None

        assert client.get(f"/teams/{team['id']}").status_code == 404
        with app.app_context():
            assert db.session.get(Team, team['id']) is None
            assert db.session.query(Player).count() == 3

    def test_delete_with_empty_roster(self, client, manager_headers, create_team):
        team = create_team(manager_headers)
        response = client.delete(f"/teams/{team['id']}", headers=manager_headers)
        assert response.status_code == 200
        assert response.get_json()['freed_players'] == 0

    def test_delete_removes_fixtures(self, app, client, manager_headers, rival_headers, create_team, create_fixture):
        hawks = create_team(manager_headers)
        rovers = create_team(rival_headers, name='Rovers')
        create_fixture(manager_headers, hawks['id'], rovers['id'])

        response = client.delete(f"/teams/{hawks['id']}", headers=manager_headers)
        assert response.get_json()['removed_fixtures'] == 1

        remaining = client.get(f"/teams/{rovers['id']}").get_json()['team']
        assert remaining['schedule'] == []
        with app.app_context():
            assert db.session.query(Schedule).count() == 0

    def test_completed_fixtures_block_delete(self, client, manager_headers, rival_headers, create_team, create_fixture):
        hawks = create_team(manager_headers)
        rovers = create_team(rival_headers, name='Rovers')
        played = create_fixture(manager_headers, hawks['id'], rovers['id'])
        client.post(f"/schedules/{played['id']}/status", json={'status': 'Completed'}, headers=manager_headers)

        response = client.delete(f"/teams/{hawks['id']}", headers=manager_headers)
        assert response.status_code == 409
        assert response.get_json() == {'error': 'Team has completed games on record and cannot be deleted'}
        assert client.get(f"/teams/{hawks['id']}").status_code == 200
        assert len(client.get(f"/teams/{rovers['id']}").get_json()['team']['schedule']) == 1

    def test_canceled_fixtures_do_not_block_delete(self, client, manager_headers, rival_headers, create_team, create_fixture):
        hawks = create_team(manager_headers)
        rovers = create_team(rival_headers, name='Rovers')
        called_off = create_fixture(manager_headers, hawks['id'], rovers['id'])
        client.post(f"/schedules/{called_off['id']}/status", json={'status': 'Canceled'}, headers=manager_headers)

        response = client.delete(f"/teams/{hawks['id']}", headers=manager_headers)
        assert response.status_code == 200
        assert response.get_json()['removed_fixtures'] == 1

    def test_non_manager_cannot_delete(self, client, manager_headers, rival_headers, create_team):
        team = create_team(manager_headers)
        assert client.delete(f"/teams/{team['id']}", headers=rival_headers).status_code == 403
        assert client.get(f"/teams/{team['id']}").status_code == 200

    def test_admin_can_delete(self, client, manager_headers, admin_headers, create_team):
        team = create_team(manager_headers)
        assert client.delete(f"/teams/{team['id']}", headers=admin_headers).status_code == 200

    def test_unknown_team(self, client, manager_headers):
        assert client.delete('/teams/missing', headers=manager_headers).status_code == 404

    def test_delete_is_audited(self, app, client, manager, manager_headers, create_team, add_player):
        team = create_team(manager_headers)
        add_player(manager_headers, team['id'], 4)
        client.delete(f"/teams/{team['id']}", headers=manager_headers)

        with app.app_context():
            entry = db.session.query(AuditLog).filter_by(action='team_deleted').one()
            assert entry.user_id == manager
            assert entry.entity_id == team['id']
            assert entry.meta['data']['freed_players'] == 1
