# src/game/game.py
import sys, argparse
import pygame
from pygame import K_SPACE, K_ESCAPE, K_r
from .config import WIDTH, HEIGHT, FPS, SEED_DEFAULT
from .engine import GravitySwapEngine, InputEvent
from .render import draw_world, draw_hud, draw_game_over


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None,
                   help="RNG seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    return p.parse_args()

def run():
    args = parse_args()

    # Resolve seed: None -> use SEED_DEFAULT; -1 -> random
    if args.seed is None:
        launch_seed = SEED_DEFAULT
    elif args.seed == -1:
        launch_seed = None  # signals Level to randomize
    else:
        launch_seed = args.seed

    pygame.init()
    pygame.display.set_caption("Gravity Swap Game")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("jetbrainsmono", 18)

    engine = GravitySwapEngine(seed=launch_seed)

    while True:
        clock.tick(FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key == K_SPACE:
                    engine.post(InputEvent.FLIP_GRAVITY)
                if event.key == K_r:
                    engine.post(InputEvent.RESTART)

        engine.advance()

        # --- Render ---
        snap = engine.snapshot()
        draw_world(screen, snap)
        draw_hud(screen, snap, font)
        if snap.game_over:
            draw_game_over(screen, snap, font)
        pygame.display.flip()

if __name__ == "__main__":
    run()
