import pytest

import game as core
from game import BalloonPopGame, Modal, Phase
from highscore import HighScoreStore


def add(game, balloon):
	game.state.balloons.append(balloon)
	return balloon


def test_new_game_waits_on_start_modal(game, presenter):
	assert game.state.phase is Phase.START
	assert game.modal is Modal.START
	assert presenter.visible is Modal.START
	assert game.state.lives == core.MAX_LIVES


def test_high_score_loaded_at_startup(presenter):
	store = HighScoreStore(path=None)
	store.save(420)
	game = BalloonPopGame(presenter=presenter, store=store)
	assert game.state.high_score == 420
	assert presenter.huds[-1]["high_score"] == 420


def test_start_game_enters_running(game, presenter):
	game.start_game()
	assert game.state.phase is Phase.RUNNING
	assert game.state.running and not game.state.paused
	assert game.modal is None
	assert presenter.visible is None


def test_pop_awards_base_points_and_effects(running_game, make_balloon):
	balloon = add(running_game, make_balloon())
	result = running_game.pop((balloon.x + 5, balloon.y))
	state = running_game.state
	assert result is not None and result.balloon is balloon
	assert balloon.popped
	assert result.points == 10
	assert state.score == 10
	assert state.current_combo == 1
	assert state.combo_timer == pytest.approx(1.5)
	assert state.level_popped == 1 and state.total_popped == 1
	assert state.level_clicks == 1
	assert len(state.particles) == 10
	assert [p.text for p in state.popups] == ["+10"]


def test_golden_pop_is_worth_five_times(running_game, make_balloon):
	balloon = add(running_game, make_balloon(golden=True))
	result = running_game.pop((balloon.x, balloon.y))
	assert result.points == 50
	assert len(running_game.state.particles) == 20


def test_combo_multiplier_caps_at_five(running_game, make_balloon):
	awarded = []
	for i in range(6):
		balloon = add(running_game, make_balloon(x=60.0 + i * 70))
		awarded.append(running_game.pop((balloon.x, balloon.y)).points)
	assert awarded == [10, 20, 30, 40, 50, 50]
	assert running_game.state.best_combo == 6


def test_miss_resets_combo_but_counts_click(running_game, make_balloon):
	balloon = add(running_game, make_balloon(x=100.0))
	running_game.pop((balloon.x, balloon.y))
	assert running_game.state.current_combo == 1
	assert running_game.pop((400.0, 50.0)) is None
	assert running_game.state.current_combo == 0
	assert running_game.state.level_clicks == 2
	assert running_game.state.best_combo == 1


def test_hit_test_prefers_most_recent_balloon(running_game, make_balloon):
	older = add(running_game, make_balloon(x=200.0))
	newer = add(running_game, make_balloon(x=210.0))
	result = running_game.pop((205.0, 300.0))
	assert result.balloon is newer
	assert not older.popped


def test_only_one_balloon_pops_per_tap(running_game, make_balloon):
	add(running_game, make_balloon(x=200.0))
	add(running_game, make_balloon(x=200.0))
	running_game.pop((200.0, 300.0))
	assert sum(b.popped for b in running_game.state.balloons) == 1


def test_hit_margin_is_eight_units(running_game, make_balloon):
	balloon = add(running_game, make_balloon(x=200.0, y=300.0, radius=30.0))
	assert running_game.pop((200.0 + 38.5, 300.0)) is None
	assert running_game.pop((200.0 + 38.0, 300.0)).balloon is balloon


def test_popped_balloon_cannot_be_hit_again(running_game, make_balloon):
	balloon = add(running_game, make_balloon())
	running_game.pop((balloon.x, balloon.y))
	assert running_game.pop((balloon.x, balloon.y)) is None


def test_popped_balloons_removed_on_next_step(running_game, make_balloon):
	keep = add(running_game, make_balloon(x=100.0))
	gone = add(running_game, make_balloon(x=300.0))
	running_game.pop((gone.x, gone.y))
	running_game.tick(0.016)
	assert running_game.state.balloons == [keep]


def test_combo_expires_after_window(running_game, make_balloon):
	balloon = add(running_game, make_balloon())
	running_game.pop((balloon.x, balloon.y))
	for _ in range(29):
		running_game.tick(0.05)
	assert running_game.state.current_combo == 1
	for _ in range(2):
		running_game.tick(0.05)
	assert running_game.state.current_combo == 0


def test_clean_first_level_scenario(running_game, presenter, make_balloon):
	for i in range(8):
		balloon = add(running_game, make_balloon(x=40.0 + i * 55, radius=22.0))
		assert running_game.pop((balloon.x, balloon.y)) is not None
	state = running_game.state
	summary = state.last_summary
	assert state.phase is Phase.LEVEL_COMPLETE
	assert state.level_clicks == 8
	assert summary.accuracy == 100
	assert summary.stars == 3
	assert summary.bonus == 3 * 50 + state.lives * 25
	assert state.score == 10 + 20 + 30 + 40 + 50 * 4 + summary.bonus
	assert summary.next_name == "Ocean Breeze"
	assert running_game.modal is Modal.LEVEL_COMPLETE
	kind, details = presenter.modals[-1]
	assert kind is Modal.LEVEL_COMPLETE
	assert details["accuracy"] == "100%"


def test_level_complete_freezes_simulation(running_game, make_balloon):
	for i in range(8):
		balloon = add(running_game, make_balloon(x=40.0 + i * 55, radius=22.0))
		running_game.pop((balloon.x, balloon.y))
	drifter = add(running_game, make_balloon(x=200.0, y=500.0, speed=60.0))
	for _ in range(10):
		running_game.tick(0.05)
	assert drifter.y == 500.0
	assert running_game.state.level_popped == 8
	assert running_game.pop((drifter.x, drifter.y)) is None


def test_next_level_resets_level_counters(running_game, make_balloon):
	assert running_game.next_level() is False
	for i in range(8):
		balloon = add(running_game, make_balloon(x=40.0 + i * 55, radius=22.0))
		running_game.pop((balloon.x, balloon.y))
	running_game.pop((1.0, 1.0))  # ignored: level already complete
	score = running_game.state.score
	assert running_game.next_level() is True
	state = running_game.state
	assert state.level == 2
	assert state.phase is Phase.RUNNING
	assert state.level_popped == 0 and state.level_clicks == 0
	assert state.current_combo == 0
	assert state.balloons == [] and state.particles == []
	assert state.score == score
	assert state.total_popped == 8
	assert running_game.modal is None


def test_balloon_escape_costs_exactly_one_life(running_game, make_balloon):
	balloon = add(running_game, make_balloon(y=-50.0 + 0.1, radius=30.0, speed=10.0))
	running_game.tick(0.05)
	assert balloon.escaped
	assert running_game.state.lives == 2
	assert balloon not in running_game.state.balloons
	for _ in range(5):
		running_game.tick(0.05)
	assert running_game.state.lives == 2


def test_balloon_just_below_threshold_stays(running_game, make_balloon):
	balloon = add(running_game, make_balloon(y=-50.0 + 1.0, radius=30.0, speed=10.0))
	running_game.tick(0.05)
	assert not balloon.escaped
	assert running_game.state.lives == 3


def test_game_over_fires_once(running_game, presenter, store, make_balloon):
	running_game.state.lives = 1
	running_game.state.score = 77
	for x in (100.0, 200.0, 300.0):
		add(running_game, make_balloon(x=x, y=-49.0, radius=30.0, speed=100.0))
	running_game.tick(0.05)
	state = running_game.state
	assert state.phase is Phase.GAME_OVER
	assert state.game_over
	assert state.lives == 0
	assert [kind for kind, _ in presenter.modals].count(Modal.GAME_OVER) == 1
	assert state.high_score == 77
	assert store.load() == 77
	running_game.tick(0.05)
	assert [kind for kind, _ in presenter.modals].count(Modal.GAME_OVER) == 1


def test_game_over_keeps_higher_previous_high_score(presenter, make_balloon):
	store = HighScoreStore(path=None)
	store.save(1000)
	game = BalloonPopGame(presenter=presenter, store=store)
	game.start_game()
	game.state.spawn_timer = 1e9
	game.state.lives = 1
	game.state.score = 500
	add(game, make_balloon(y=-49.0, speed=100.0))
	game.tick(0.05)
	assert game.state.game_over
	assert game.state.high_score == 1000
	assert store.load() == 1000


def test_restart_after_game_over_resets_everything_but_high_score(running_game, make_balloon):
	for i in range(3):
		balloon = add(running_game, make_balloon(x=60.0 + i * 80))
		running_game.pop((balloon.x, balloon.y))
	running_game.state.lives = 1
	add(running_game, make_balloon(y=-49.0, speed=100.0))
	running_game.tick(0.05)
	high = running_game.state.high_score
	assert high == 60
	running_game.start_game()
	state = running_game.state
	assert state.phase is Phase.RUNNING
	assert (state.score, state.level, state.lives) == (0, 1, 3)
	assert state.total_popped == 0
	assert state.best_combo == 0 and state.current_combo == 0
	assert state.high_score == high


def test_pause_and_resume_keep_counters(running_game, presenter, make_balloon):
	balloon = add(running_game, make_balloon(speed=50.0))
	running_game.pop((400.0, 40.0))
	assert running_game.pause() is True
	assert running_game.state.paused
	assert running_game.modal is Modal.PAUSE
	assert presenter.modals[-1][1]["lives"] == 3
	y = balloon.y
	running_game.tick(0.05)
	assert balloon.y == y
	assert running_game.pop((balloon.x, balloon.y)) is None
	assert running_game.state.level_clicks == 1
	assert running_game.pause() is False
	assert running_game.resume() is True
	assert running_game.modal is None
	running_game.tick(0.05)
	assert balloon.y < y
	assert running_game.state.level_clicks == 1


def test_toggle_pause(running_game):
	assert running_game.toggle_pause() is True
	assert running_game.state.phase is Phase.PAUSED
	assert running_game.toggle_pause() is True
	assert running_game.state.phase is Phase.RUNNING


def test_toggle_pause_ignored_outside_play(game):
	assert game.toggle_pause() is False
	assert game.state.phase is Phase.START


def test_restart_from_pause(running_game, make_balloon):
	balloon = add(running_game, make_balloon())
	running_game.pop((balloon.x, balloon.y))
	running_game.pause()
	running_game.start_game()
	assert running_game.state.phase is Phase.RUNNING
	assert running_game.state.score == 0
	assert running_game.modal is None


def test_main_menu_returns_to_start(running_game):
	running_game.pause()
	running_game.main_menu()
	assert running_game.state.phase is Phase.START
	assert running_game.modal is Modal.START


def test_delta_time_is_capped(running_game, make_balloon):
	balloon = add(running_game, make_balloon(y=400.0, speed=100.0))
	running_game.tick(1.0)
	assert balloon.y == pytest.approx(400.0 - 100.0 * core.MAX_FRAME_DT)
	running_game.tick(-1.0)
	assert balloon.y == pytest.approx(400.0 - 100.0 * core.MAX_FRAME_DT)


def test_wobble_moves_balloon_sideways(running_game, make_balloon):
	balloon = add(
		running_game,
		make_balloon(x=200.0, wobble_amount=10.0, wobble_speed=2.0, wobble_offset=1.0),
	)
	running_game.tick(0.05)
	assert balloon.x != 200.0
	assert balloon.time == pytest.approx(0.05)


def test_balloon_clamped_inside_canvas(running_game, make_balloon):
	width = running_game.state.width
	balloon = add(running_game, make_balloon(x=width + 50.0, radius=30.0))
	running_game.tick(0.01)
	assert balloon.x == pytest.approx(width - 30.0)


def test_resize_clamps_on_next_step_only(running_game, make_balloon):
	balloon = add(running_game, make_balloon(x=400.0, radius=30.0))
	running_game.resize(300, 600)
	assert balloon.x == 400.0
	running_game.tick(0.01)
	assert balloon.x == pytest.approx(270.0)


def test_spawner_adds_balloon_and_rearms(game):
	game.start_game()
	game.tick(0.016)
	state = game.state
	assert len(state.balloons) == 1
	interval = state.config.spawn_interval
	assert interval * 0.6 <= state.spawn_timer <= interval * 1.2


def test_seeded_games_spawn_identically(presenter):
	import random

	first = BalloonPopGame(presenter=presenter, store=HighScoreStore(path=None), rng=random.Random(9))
	second = BalloonPopGame(presenter=presenter, store=HighScoreStore(path=None), rng=random.Random(9))
	for g in (first, second):
		g.start_game()
		for _ in range(100):
			g.tick(0.05)
	assert [(b.x, b.y, b.color) for b in first.state.balloons] == [
		(b.x, b.y, b.color) for b in second.state.balloons
	]


def test_particles_fall_and_expire(running_game, make_balloon):
	balloon = add(running_game, make_balloon())
	running_game.pop((balloon.x, balloon.y))
	particle = running_game.state.particles[0]
	vy = particle.vy
	running_game.tick(0.05)
	assert particle.vy == pytest.approx(vy + 200.0 * 0.05)
	assert particle.life < 1.0
	for _ in range(20):
		running_game.tick(0.05)
	assert running_game.state.particles == []


def test_popups_expire_even_while_paused(running_game, make_balloon):
	balloon = add(running_game, make_balloon())
	running_game.pop((balloon.x, balloon.y))
	running_game.pause()
	for _ in range(15):
		running_game.tick(0.05)
	assert len(running_game.state.popups) == 1
	for _ in range(2):
		running_game.tick(0.05)
	assert running_game.state.popups == []


def test_render_requested_every_frame(game, presenter):
	game.tick(0.016)
	game.start_game()
	game.tick(0.016)
	game.pause()
	game.tick(0.016)
	assert presenter.renders == 3


def test_levels_past_table_reuse_final_config(running_game):
	running_game.state.level = 14
	fields = running_game.hud_fields()
	assert fields["level_name"] == "The Grand Finale"
	assert fields["target"] == "0/40"


def test_hud_reports_combo_and_lives(running_game, presenter, make_balloon):
	balloon = add(running_game, make_balloon())
	running_game.pop((balloon.x, balloon.y))
	hud = presenter.huds[-1]
	assert hud["combo"] == 1
	assert hud["lives"] == 3
	assert hud["target"] == "1/8"
	assert hud["score"] == 10
