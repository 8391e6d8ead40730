from flask import Blueprint, current_app, jsonify

game_api = Blueprint('game_api', __name__)


@game_api.route('/state')
def game_state():
    return jsonify(current_app.extensions['price_game'].snapshot())


@game_api.route('/players')
def game_players():
    players = current_app.extensions['price_game'].players_snapshot()
    return jsonify({'type': 'players', 'players': players})
