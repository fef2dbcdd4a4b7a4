import pygame
from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from main import WarpSpeed

CONSOLE_LINES = 11


def log(self: "WarpSpeed", text):
    self.consoleLog.append(str(text))
    print(text)


def consoleLines(self: "WarpSpeed", fps: float):
    field = self.starField
    lines = [
        f"FPS: {fps:.1f} / {field.framerate}",
        f"Stars: {len(field)}",
        f"Spawned: {field.spawned_total}  Despawned: {field.despawned_total}",
        f"Frame: {field.frame}",
    ]
    return lines + self.consoleLog[-CONSOLE_LINES:]


def runConsole(self: "WarpSpeed", fps: float):
    if not self.consoleOpen:
        return

    rect = pygame.Rect(20, 20, 600, 330)
    panel = pygame.Surface(rect.size)
    panel.set_alpha(200)
    font = pygame.font.SysFont("Consolas", 20)

    panel.fill((20, 20, 20))
    for i, s in enumerate(consoleLines(self, fps)):
        color = (200, 200, 200) if i < 4 else (100, 100, 100)
        panel.blit(font.render(s, True, color), (5, 5 + i * 20))

    self.screen.blit(panel, rect.topleft)
