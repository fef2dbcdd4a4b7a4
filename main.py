import pygame
import sys
import time
import traceback
from collections import deque

from core.console import runConsole
from core.valInit import valInit
from particles.starField import InvalidConfigError


class WarpSpeed(valInit):
    def __init__(self, configDir="configs"):
        super().__init__(configDir)

        pygame.init()
        pygame.font.init()
        self.screen = pygame.display.set_mode(self.res)
        pygame.display.set_caption("Warp Speed")
        pygame.mouse.set_cursor(pygame.SYSTEM_CURSOR_ARROW)

        self.clock = pygame.time.Clock()
        self.frameTimeCache = deque(maxlen=144)
        self.FPS = 0
        self.running = True

        self.log("Warp Speed initialized")

    def handleEvents(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_F1:
                    self.consoleOpen = not self.consoleOpen

    def drawWindow(self):
        self.screen.fill((0, 0, 0))

        for start, end, color in self.starField.draw(self.res):
            pygame.draw.line(self.screen, color, start, end)

        runConsole(self, self.FPS)
        pygame.display.update()

    def run(self):
        while self.running:
            self.handleEvents()
            if not self.running:
                break

            self.starField.update()
            self.drawWindow()

            self.frameTimeCache.append(self.clock.tick(self.FRAMERATE) / 1000)
            total = sum(self.frameTimeCache)
            self.FPS = len(self.frameTimeCache) / total if total > 0 else 0

        self.log(f"Exiting after {self.starField.frame} frames")
        pygame.quit()


def writeCrashLog(path="crash.log"):
    with open(path, "a", encoding="utf-8") as f:
        f.write("\n" + "="*60 + "\n")
        f.write(time.strftime("%Y-%m-%d %H:%M:%S") + "\n")
        traceback.print_exc(file=f)


def run_forever(configDir="configs"):
    try:
        game = WarpSpeed(configDir)
    except InvalidConfigError as e:
        print(f"Bad config in {configDir}: {e}")
        sys.exit(2)

    try:
        game.run()
    except KeyboardInterrupt:
        raise
    except Exception:
        writeCrashLog()
        traceback.print_exc()
        sys.exit(1)
    print("Program exited Normally!")


if __name__ == "__main__":
    run_forever()
